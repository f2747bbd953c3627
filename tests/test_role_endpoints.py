"""
Role management and access scope API tests.
"""

import pytest

from chapterdesk.crud.role_assignment import CHAPTER, ZONE
from chapterdesk.models import ChapterRoleHistory, UserRole

API = "/api/v1"


@pytest.fixture
def org(factory):
    zone = factory.zone("North")
    return {
        "zone": zone,
        "c1": factory.chapter(zone, "Alpha"),
        "c2": factory.chapter(zone, "Beta"),
    }


@pytest.fixture
def admin(factory):
    return factory.user(email="admin@example.com", role=UserRole.ADMIN, full_name="Admin User")


class TestAuthentication:

    def test_missing_token_is_rejected(self, client, org):
        response = client.get(f"{API}/chapters/{org['c1'].id}/roles")
        assert response.status_code in (401, 403)

    def test_invalid_token_is_rejected(self, client, org):
        response = client.get(
            f"{API}/chapters/{org['c1'].id}/roles",
            headers={"Authorization": "Bearer not-a-jwt"}
        )
        assert response.status_code == 401


class TestChapterRoleEndpoints:

    def test_admin_assigns_and_lists_roles(self, client, auth, admin, factory, org):
        member = factory.member(chapter=org["c1"])

        response = client.post(
            f"{API}/chapters/{org['c1'].id}/roles",
            json={"member_id": member.id, "role_type": "secretary"},
            headers=auth(admin)
        )
        assert response.status_code == 201
        body = response.json()
        assert body["role_type"] == "secretary"
        assert body["chapter_id"] == org["c1"].id

        listing = client.get(f"{API}/chapters/{org['c1'].id}/roles", headers=auth(admin))
        assert listing.status_code == 200
        assert [(r["role_type"], r["member"]["id"]) for r in listing.json()] == [("secretary", member.id)]

    def test_repeat_assignment_returns_existing(self, client, auth, admin, factory, org):
        member = factory.member(chapter=org["c1"])
        payload = {"member_id": member.id, "role_type": "secretary"}

        first = client.post(f"{API}/chapters/{org['c1'].id}/roles", json=payload, headers=auth(admin))
        second = client.post(f"{API}/chapters/{org['c1'].id}/roles", json=payload, headers=auth(admin))

        assert first.json()["id"] == second.json()["id"]
        history = client.get(f"{API}/chapters/{org['c1'].id}/roles/history", headers=auth(admin))
        assert len(history.json()) == 1

    def test_occupied_slot_returns_conflict(self, client, auth, admin, factory, org):
        holder = factory.member(chapter=org["c1"])
        other = factory.member(chapter=org["c1"])
        client.post(
            f"{API}/chapters/{org['c1'].id}/roles",
            json={"member_id": holder.id, "role_type": "treasurer"},
            headers=auth(admin)
        )

        response = client.post(
            f"{API}/chapters/{org['c1'].id}/roles",
            json={"member_id": other.id, "role_type": "treasurer"},
            headers=auth(admin)
        )

        assert response.status_code == 409
        assert "Remove the current assignment first" in response.json()["detail"]

    def test_unknown_role_type_is_a_validation_error(self, client, auth, admin, factory, org):
        member = factory.member(chapter=org["c1"])
        response = client.post(
            f"{API}/chapters/{org['c1'].id}/roles",
            json={"member_id": member.id, "role_type": "president"},
            headers=auth(admin)
        )
        assert response.status_code == 422

    def test_unknown_member_is_404(self, client, auth, admin, org):
        response = client.post(
            f"{API}/chapters/{org['c1'].id}/roles",
            json={"member_id": 9999, "role_type": "guardian"},
            headers=auth(admin)
        )
        assert response.status_code == 404
        assert response.json()["detail"] == "Member not found"

    def test_office_bearer_from_other_chapter_is_400(self, client, auth, admin, factory, org):
        outsider = factory.member(chapter=org["c2"])
        response = client.post(
            f"{API}/chapters/{org['c1'].id}/roles",
            json={"member_id": outsider.id, "role_type": "chapterHead"},
            headers=auth(admin)
        )
        assert response.status_code == 400

    def test_remove_role_closes_history(self, client, auth, admin, factory, db, org):
        member = factory.member(chapter=org["c1"])
        created = client.post(
            f"{API}/chapters/{org['c1'].id}/roles",
            json={"member_id": member.id, "role_type": "guardian"},
            headers=auth(admin)
        ).json()

        response = client.delete(f"{API}/chapters/{org['c1'].id}/roles/{created['id']}", headers=auth(admin))

        assert response.status_code == 200
        assert response.json()["history_action"] == "removed"
        db.expire_all()
        row = db.query(ChapterRoleHistory).one()
        assert row.end_date is not None
        assert row.performed_by_name == "Admin User"
        assert client.get(f"{API}/chapters/{org['c1'].id}/roles", headers=auth(admin)).json() == []

    def test_remove_via_wrong_chapter_is_404(self, client, auth, admin, factory, role_service, org):
        member = factory.member(chapter=org["c1"])
        assignment = role_service.assign_role(CHAPTER, org["c1"].id, "guardian", member.id)

        response = client.delete(f"{API}/chapters/{org['c2'].id}/roles/{assignment.id}", headers=auth(admin))

        assert response.status_code == 404

    def test_office_bearer_manages_own_chapter_only(self, client, auth, factory, role_service, org):
        head, head_user = factory.member_with_user(chapter=org["c1"])
        role_service.assign_role(CHAPTER, org["c1"].id, "chapterHead", head.id)
        recruit = factory.member(chapter=org["c1"])

        own = client.post(
            f"{API}/chapters/{org['c1'].id}/roles",
            json={"member_id": recruit.id, "role_type": "secretary"},
            headers=auth(head_user)
        )
        other = client.get(f"{API}/chapters/{org['c2'].id}/roles", headers=auth(head_user))

        assert own.status_code == 201
        assert other.status_code == 403

    def test_regional_director_manages_zone_chapters(self, client, auth, factory, role_service, org):
        director, director_user = factory.member_with_user()
        role_service.assign_role(ZONE, org["zone"].id, "RegionalDirector", director.id)

        response = client.get(f"{API}/chapters/{org['c2'].id}/roles", headers=auth(director_user))

        assert response.status_code == 200

    def test_plain_member_is_forbidden(self, client, auth, factory, org):
        _, user = factory.member_with_user(chapter=org["c1"])
        response = client.get(f"{API}/chapters/{org['c1'].id}/roles", headers=auth(user))
        assert response.status_code == 403

    def test_member_roles_listing(self, client, auth, admin, factory, role_service, org):
        member = factory.member(chapter=org["c1"])
        role_service.assign_role(CHAPTER, org["c1"].id, "treasurer", member.id)
        role_service.assign_role(ZONE, org["zone"].id, "JointSecretary", member.id)

        response = client.get(f"{API}/members/{member.id}/roles", headers=auth(admin))

        assert response.status_code == 200
        body = response.json()
        assert [r["role_type"] for r in body["chapter_roles"]] == ["treasurer"]
        assert [r["role_type"] for r in body["zone_roles"]] == ["JointSecretary"]


class TestZoneRoleEndpoints:

    def test_admin_assigns_zone_role(self, client, auth, admin, factory, org):
        member = factory.member()
        response = client.post(
            f"{API}/zones/{org['zone'].id}/roles",
            json={"member_id": member.id, "role_type": "RegionalDirector"},
            headers=auth(admin)
        )
        assert response.status_code == 201
        assert response.json()["zone_id"] == org["zone"].id

    def test_non_admin_cannot_assign_zone_role(self, client, auth, factory, role_service, org):
        director, director_user = factory.member_with_user()
        role_service.assign_role(ZONE, org["zone"].id, "RegionalDirector", director.id)

        response = client.post(
            f"{API}/zones/{org['zone'].id}/roles",
            json={"member_id": factory.member().id, "role_type": "JointSecretary"},
            headers=auth(director_user)
        )
        assert response.status_code == 403

    def test_director_reads_own_zone_roles_and_history(self, client, auth, factory, role_service, org):
        director, director_user = factory.member_with_user()
        role_service.assign_role(ZONE, org["zone"].id, "RegionalDirector", director.id)
        other_zone = factory.zone("South")

        roles = client.get(f"{API}/zones/{org['zone'].id}/roles", headers=auth(director_user))
        history = client.get(f"{API}/zones/{org['zone'].id}/roles/history", headers=auth(director_user))
        foreign = client.get(f"{API}/zones/{other_zone.id}/roles", headers=auth(director_user))

        assert roles.status_code == 200
        assert [r["role_type"] for r in roles.json()] == ["RegionalDirector"]
        assert [h["action"] for h in history.json()] == ["assigned"]
        assert foreign.status_code == 403

    def test_admin_removes_zone_role(self, client, auth, admin, factory, role_service, org):
        assignment = role_service.assign_role(ZONE, org["zone"].id, "JointSecretary", factory.member().id)

        response = client.delete(f"{API}/zones/{org['zone'].id}/roles/{assignment.id}", headers=auth(admin))

        assert response.status_code == 200
        assert response.json()["unit_type"] == "zone"


class TestAccessEndpoints:

    def test_my_access_scope(self, client, auth, factory, role_service, org):
        member, user = factory.member_with_user(chapter=org["c2"])
        role_service.assign_role(CHAPTER, org["c1"].id, "guardian", member.id)
        role_service.assign_role(CHAPTER, org["c2"].id, "treasurer", member.id)

        response = client.get(f"{API}/access/me", headers=auth(user))

        assert response.status_code == 200
        body = response.json()
        assert body["OB"] == [org["c2"].id]
        assert body["DC"] == [org["c1"].id]
        assert body["RD"] == []
        assert body["own_chapter"] is None

        primary = client.get(f"{API}/access/me/primary-role", headers=auth(user))
        assert primary.json() == {"primary_role": "development_coordinator"}

    def test_role_context(self, client, auth, factory, org):
        _, user = factory.member_with_user(chapter=org["c1"])

        body = client.get(f"{API}/access/me/context", headers=auth(user)).json()

        assert body["primary_role"] == "member"
        assert body["access_level"] == "own-chapter"
        assert body["scope"]["own_chapter"] == {"chapter_id": org["c1"].id, "access_type": "own_chapter"}

    def test_admin_reads_any_user_scope(self, client, auth, admin, factory, org):
        _, user = factory.member_with_user(chapter=org["c1"])

        assert client.get(f"{API}/access/users/{user.id}", headers=auth(admin)).status_code == 200
        assert client.get(f"{API}/access/users/{admin.id}", headers=auth(user)).status_code == 403

    def test_auth_me_embeds_scope(self, client, auth, factory, role_service, org):
        member, user = factory.member_with_user(chapter=org["c1"])
        role_service.assign_role(CHAPTER, org["c1"].id, "secretary", member.id)

        body = client.get(f"{API}/auth/me", headers=auth(user)).json()

        assert body["is_member"] is True
        assert body["member_id"] == member.id
        assert body["roles"] == [{"role_type": "secretary", "chapter_id": org["c1"].id}]
        assert body["accessible_chapters"][0] == {"role": "OB", "chapters": [org["c1"].id]}

    def test_auth_me_for_non_member(self, client, auth, admin):
        body = client.get(f"{API}/auth/me", headers=auth(admin)).json()
        assert body["is_member"] is False
        assert body["access_scope"]["OB"] == []
