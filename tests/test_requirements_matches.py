"""Tests for requirements, matches and trainer auto-notification."""

from trainermatch.models import College, Match, MatchStatus, Vendor


class TestRequirements:

    def test_create_uses_callers_vendor(self, client, vendor_user, vendor, college, auth):
        response = client.post("/api/requirements", headers=auth(vendor_user), json={
            "title": "Kubernetes Workshop",
            "tags": ["devops", "k8s"],
            "collegeId": college.id,
            "vendorId": "someone-else",
            "budgetMin": 100,
            "budgetMax": 200,
        })

        assert response.status_code == 201
        body = response.json()
        assert body["vendorId"] == vendor.id
        assert body["status"] == "OPEN"
        assert body["college"]["name"] == "MIT"

    def test_college_must_belong_to_vendor(self, client, db, vendor_user, auth):
        other = Vendor(name="Other Co")
        db.add(other)
        db.flush()
        foreign = College(name="Elsewhere", vendor_id=other.id)
        db.add(foreign)
        db.commit()

        response = client.post("/api/requirements", headers=auth(vendor_user),
                               json={"title": "Workshop", "collegeId": foreign.id})
        assert response.status_code == 400

    def test_trainer_cannot_create(self, client, trainer_user, auth):
        user, _ = trainer_user
        response = client.post("/api/requirements", headers=auth(user), json={"title": "Nope nope"})
        assert response.status_code == 403

    def test_list_with_counts(self, client, db, trainer_user, make_requirement, make_trainer, auth):
        user, alice = trainer_user
        older = make_requirement("Older")
        make_requirement("Newer")
        bob = make_trainer("Bob")
        db.add_all([
            Match(requirement_id=older.id, trainer_id=alice.id, score=0.8),
            Match(requirement_id=older.id, trainer_id=bob.id, score=0.6),
        ])
        db.commit()

        response = client.get("/api/requirements", headers=auth(user))

        assert response.status_code == 200
        rows = {r["title"]: r for r in response.json()}
        assert rows["Older"]["matchCount"] == 2
        assert rows["Newer"]["matchCount"] == 0
        assert rows["Older"]["vendor"]["name"] == "Acme Training"

    def test_detail_orders_matches_by_score(self, client, db, vendor_user, make_requirement,
                                            make_trainer, auth):
        requirement = make_requirement("Data Science 101")
        low, high = make_trainer("Low"), make_trainer("High")
        db.add_all([
            Match(requirement_id=requirement.id, trainer_id=low.id, score=0.3),
            Match(requirement_id=requirement.id, trainer_id=high.id, score=0.95),
        ])
        db.commit()

        response = client.get(f"/api/requirements/{requirement.id}", headers=auth(vendor_user))

        body = response.json()
        assert [m["trainer"]["name"] for m in body["matches"]] == ["High", "Low"]
        assert body["matchCount"] == 2
        assert body["proposals"] == []

    def test_unknown_requirement(self, client, vendor_user, auth):
        assert client.get("/api/requirements/nope", headers=auth(vendor_user)).status_code == 404


class TestMatches:

    def test_create_and_duplicate(self, client, vendor_user, make_requirement, make_trainer, auth):
        requirement = make_requirement()
        trainer = make_trainer("Alice")
        body = {"requirementId": requirement.id, "trainerId": trainer.id,
                "score": 0.82, "explanation": "Skills Match: 80%"}

        first = client.post("/api/matches", headers=auth(vendor_user), json=body)
        second = client.post("/api/matches", headers=auth(vendor_user), json=body)

        assert first.status_code == 201
        assert first.json()["trainer"]["name"] == "Alice"
        assert first.json()["status"] == "PENDING"
        assert second.status_code == 409

    def test_score_out_of_range(self, client, vendor_user, make_requirement, make_trainer, auth):
        response = client.post("/api/matches", headers=auth(vendor_user), json={
            "requirementId": make_requirement().id, "trainerId": make_trainer("Alice").id, "score": 1.5,
        })
        assert response.status_code == 422

    def test_list_and_update_status(self, client, db, vendor_admin, make_requirement, make_trainer, auth):
        requirement = make_requirement()
        a, b = make_trainer("A"), make_trainer("B")
        db.add_all([
            Match(requirement_id=requirement.id, trainer_id=a.id, score=0.5),
            Match(requirement_id=requirement.id, trainer_id=b.id, score=0.9),
        ])
        db.commit()

        listed = client.get(f"/api/matches/requirement/{requirement.id}", headers=auth(vendor_admin)).json()
        assert [m["score"] for m in listed] == [0.9, 0.5]

        response = client.patch(f"/api/matches/{listed[0]['id']}/status",
                                headers=auth(vendor_admin), json={"status": "ACCEPTED"})
        assert response.status_code == 200
        assert response.json()["status"] == "ACCEPTED"

        db.expire_all()
        assert db.get(Match, listed[0]["id"]).status == MatchStatus.ACCEPTED

    def test_auto_notify_only_above_threshold(self, client, db, queue, vendor_user,
                                              make_requirement, make_trainer, auth):
        requirement = make_requirement("Python Bootcamp")
        strong = make_trainer("Strong", phone="+15551234")
        edge = make_trainer("Edge")
        weak = make_trainer("Weak")
        db.add_all([
            Match(requirement_id=requirement.id, trainer_id=strong.id, score=0.86),
            Match(requirement_id=requirement.id, trainer_id=edge.id, score=0.7),
            Match(requirement_id=requirement.id, trainer_id=weak.id, score=0.2),
        ])
        db.commit()

        response = client.post(f"/api/matches/requirement/{requirement.id}/auto-notify",
                               headers=auth(vendor_user))

        assert response.status_code == 200
        assert response.json() == {"notified": 1, "trainers": ["strong@example.com"]}
        assert [p["recipient"] for p in queue.of_type("email")] == ["strong@example.com"]
        assert [p["recipient"] for p in queue.of_type("whatsapp")] == ["+15551234"]
        assert "86% match" in queue.of_type("email")[0]["message"]

    def test_trainer_cannot_manage_matches(self, client, trainer_user, make_requirement, auth):
        user, trainer = trainer_user
        response = client.post("/api/matches", headers=auth(user), json={
            "requirementId": make_requirement().id, "trainerId": trainer.id, "score": 0.5,
        })
        assert response.status_code == 403
