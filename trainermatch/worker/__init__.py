"""
Notification worker - consumes the RQ notification queue.

Run: python -m trainermatch.worker
"""
