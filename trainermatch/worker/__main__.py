from trainermatch.worker.main import main

main()
