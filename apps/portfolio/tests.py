from datetime import timedelta
from io import StringIO
import json
import os
import tempfile

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.db import IntegrityError, transaction
from django.test import TestCase, override_settings
from rest_framework.test import APITestCase
from rest_framework_simplejwt.tokens import AccessToken

from common.exceptions import RecordConflict, RecordNotFound
from common.validation import flatten_errors

from . import repositories
from .models import Education, Experience, ExperienceRole, Honor, Project, PublicProfile, Resume

User = get_user_model()


def project_payload(**overrides):
    data = {
        "title": "X",
        "description": "d",
        "techStack": ["Go"],
        "images": ["https://img.example.com/a.png"],
        "category": "Web",
    }
    data.update(overrides)
    return data


def experience_payload(**overrides):
    data = {
        "company": "Acme",
        "logo": "/logos/acme.png",
        "period": "2020 - 2022",
        "roles": [
            {"title": "Engineer", "period": "2020", "description": ["Built things"]},
            {"title": "Senior Engineer", "period": "2021 - 2022", "description": ["Led things", "Shipped things"]},
        ],
    }
    data.update(overrides)
    return data


def profile_data(name="Me", active=True):
    return {
        "name": name,
        "image": "https://img.example.com/me.png",
        "headlines": ["Engineer"],
        "tagline": "Builds software",
        "is_active": active,
    }


def resume_data(title="CV", active=True):
    return {
        "title": title,
        "description": "Latest CV",
        "download_link": "https://files.example.com/cv.pdf",
        "is_active": active,
    }


class PortfolioAPITestCase(APITestCase):
    def setUp(self):
        self.admin = User.objects.create_superuser(email="admin@example.com", password="S3cure-pass!")
        self.viewer = User.objects.create_user(email="viewer@example.com", password="S3cure-pass!")

    def login_as(self, user):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(user)}")


# -------------------------------------------------------------------
# Repository behaviour
# -------------------------------------------------------------------
class ExclusiveActiveRepositoryTests(TestCase):
    def assert_single_active(self, model):
        self.assertLessEqual(model.objects.filter(is_active=True).count(), 1)

    def test_create_active_deactivates_previous(self):
        first = repositories.public_profiles.create(profile_data("A"))
        second = repositories.public_profiles.create(profile_data("B"))
        first.refresh_from_db()
        self.assertFalse(first.is_active)
        self.assertTrue(second.is_active)
        self.assert_single_active(PublicProfile)

    def test_create_inactive_leaves_current_active(self):
        first = repositories.resumes.create(resume_data("A"))
        repositories.resumes.create(resume_data("B", active=False))
        first.refresh_from_db()
        self.assertTrue(first.is_active)
        self.assert_single_active(Resume)

    def test_update_to_active_sweeps_others(self):
        a = repositories.resumes.create(resume_data("A"))
        b = repositories.resumes.create(resume_data("B", active=False))
        repositories.resumes.update(b.pk, {"is_active": True})
        a.refresh_from_db()
        b.refresh_from_db()
        self.assertFalse(a.is_active)
        self.assertTrue(b.is_active)

    def test_set_active_exclusive_over_any_sequence(self):
        rows = [repositories.public_profiles.create(profile_data(str(i), active=i % 2 == 0)) for i in range(5)]
        for row in reversed(rows):
            repositories.public_profiles.set_active_exclusive(row.pk)
            self.assert_single_active(PublicProfile)
            self.assertEqual(repositories.public_profiles.get_active().pk, row.pk)

    def test_get_active_none(self):
        self.assertIsNone(repositories.resumes.get_active())

    def test_set_active_unknown_id(self):
        with self.assertRaises(RecordNotFound):
            repositories.resumes.set_active_exclusive("00000000-0000-0000-0000-000000000000")

    def test_database_rejects_second_active_row(self):
        Resume.objects.create(**resume_data("A"))
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Resume.objects.create(**resume_data("B"))
        PublicProfile.objects.create(**profile_data("A"))
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                PublicProfile.objects.create(**profile_data("B"))
        self.assert_single_active(Resume)
        self.assert_single_active(PublicProfile)

    def test_unswept_active_insert_is_conflict(self):
        repositories.resumes.create(resume_data("A"))
        # a plain repository skips the exclusivity sweep, leaving the index to refuse the row
        unswept = repositories.ResourceRepository(Resume, "cv", label="CV")
        with self.assertRaises(RecordConflict):
            unswept.create(resume_data("B"))
        self.assertEqual(Resume.objects.count(), 1)


class ResourceRepositoryTests(TestCase):
    def test_duplicate_title_is_conflict(self):
        repositories.projects.create({"title": "Dup", "description": "d", "tech_stack": ["Go"], "images": ["a"], "category": "c"})
        with self.assertRaises(RecordConflict):
            repositories.projects.create({"title": "Dup", "description": "d", "tech_stack": ["Go"], "images": ["a"], "category": "c"})
        self.assertEqual(Project.objects.count(), 1)

    def test_malformed_id_is_not_found(self):
        with self.assertRaises(RecordNotFound):
            repositories.projects.get_by_id("not-a-uuid")

    def test_upsert_by_title_replaces_fields(self):
        base = {"description": "v1", "image": "/a.png", "issued_by": "Org", "issued_at": "2023-01-01T00:00:00Z"}
        first = repositories.honors.upsert_by_title("Award", dict(base, title="Award"))
        second = repositories.honors.upsert_by_title("Award", dict(base, title="Award", description="v2"))
        self.assertEqual(first.pk, second.pk)
        self.assertEqual(Honor.objects.get().description, "v2")

    def test_delete_returns_removed_record(self):
        project = repositories.projects.create({"title": "Gone", "description": "d", "tech_stack": ["Go"], "images": ["a"], "category": "c"})
        removed = repositories.projects.delete(project.pk)
        self.assertEqual(removed.pk, project.pk)
        self.assertFalse(Project.objects.exists())


class FlattenErrorsTests(TestCase):
    def test_nested_list_errors_keep_index_path(self):
        detail = {"roles": [{}, {"title": ["This field is required."]}]}
        self.assertEqual(flatten_errors(detail), [{"field": "roles.1.title", "message": "This field is required."}])

    def test_object_level_error_of_nested_field_reports_the_field(self):
        detail = {"roles": {"non_field_errors": ["This list may not be empty."]}}
        self.assertEqual(flatten_errors(detail), [{"field": "roles", "message": "This list may not be empty."}])

    def test_top_level_object_error(self):
        detail = {"non_field_errors": ["Passwords do not match."]}
        self.assertEqual(flatten_errors(detail), [{"field": "non_field_errors", "message": "Passwords do not match."}])


class ExperienceRepositoryTests(TestCase):
    roles = [
        {"title": "Engineer", "period": "2020", "description": ["a"]},
        {"title": "Lead", "period": "2021", "description": ["b", "c"]},
    ]

    def setUp(self):
        self.experience = repositories.experiences.create(
            {"company": "Acme", "logo": "/acme.png", "period": "2020 - 2022", "roles": self.roles}
        )

    def test_roles_keep_order(self):
        self.assertEqual([r.title for r in self.experience.roles.all()], ["Engineer", "Lead"])

    def test_replace_roles_is_idempotent(self):
        repositories.experiences.replace_roles(self.experience.pk, self.roles)
        first = [(r.title, r.period, r.description) for r in ExperienceRole.objects.filter(experience=self.experience)]
        repositories.experiences.replace_roles(self.experience.pk, self.roles)
        second = [(r.title, r.period, r.description) for r in ExperienceRole.objects.filter(experience=self.experience)]
        self.assertEqual(first, second)
        self.assertEqual(len(second), 2)

    def test_delete_cascades_roles(self):
        repositories.experiences.delete(self.experience.pk)
        self.assertFalse(Experience.objects.exists())
        self.assertFalse(ExperienceRole.objects.exists())

    def test_upsert_by_company(self):
        again = repositories.experiences.upsert_by_company(
            "Acme", {"company": "Acme", "logo": "/new.png", "period": "2020 - 2023", "roles": self.roles[:1]}
        )
        self.assertEqual(again.pk, self.experience.pk)
        self.assertEqual(Experience.objects.get().logo, "/new.png")
        self.assertEqual(ExperienceRole.objects.count(), 1)


# -------------------------------------------------------------------
# Gateway: gate, validation, envelope
# -------------------------------------------------------------------
class GateTests(PortfolioAPITestCase):
    def test_anonymous_write_is_401_without_side_effects(self):
        res = self.client.post("/api/v1/projects", project_payload(), format="json")
        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.json(), {"success": False, "error": "Unauthorized", "code": "unauthorized"})
        self.assertFalse(Project.objects.exists())

    def test_expired_token_write_is_401(self):
        token = AccessToken.for_user(self.admin)
        token.set_exp(lifetime=-timedelta(minutes=1))
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        res = self.client.post("/api/v1/projects", project_payload(), format="json")
        self.assertEqual(res.status_code, 401)
        self.assertFalse(Project.objects.exists())

    def test_viewer_write_is_401(self):
        self.login_as(self.viewer)
        res = self.client.post("/api/v1/projects", project_payload(), format="json")
        self.assertEqual(res.status_code, 401)
        self.assertFalse(Project.objects.exists())

    def test_viewer_delete_does_not_reveal_or_remove(self):
        project = Project.objects.create(title="Keep", description="d", tech_stack=["Go"], images=["a"], category="c")
        self.login_as(self.viewer)
        res = self.client.delete(f"/api/v1/projects/{project.pk}")
        self.assertEqual(res.status_code, 401)
        self.assertTrue(Project.objects.filter(pk=project.pk).exists())

    def test_invalid_token_does_not_block_public_read(self):
        self.client.credentials(HTTP_AUTHORIZATION="Bearer broken")
        res = self.client.get("/api/v1/projects")
        self.assertEqual(res.status_code, 200)

    def test_gate_runs_before_validation(self):
        res = self.client.post("/api/v1/projects", {"title": ""}, format="json")
        self.assertEqual(res.status_code, 401)

    def test_stats_is_admin_only(self):
        self.assertEqual(self.client.get("/api/v1/stats").status_code, 401)
        self.login_as(self.admin)
        res = self.client.get("/api/v1/stats")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["data"]["projects"], 0)


class ProjectAPITests(PortfolioAPITestCase):
    def setUp(self):
        super().setUp()
        self.login_as(self.admin)

    def test_round_trip(self):
        res = self.client.post("/api/v1/projects", project_payload(), format="json")
        self.assertEqual(res.status_code, 201)
        body = res.json()
        self.assertTrue(body["success"])
        created = body["data"]
        self.assertEqual(created["techStack"], ["Go"])
        self.assertEqual(created["awards"], [])
        self.assertIsNone(created["liveLink"])
        for key in ("id", "createdAt", "updatedAt"):
            self.assertIn(key, created)

        self.client.credentials()
        fetched = self.client.get(f"/api/v1/projects/{created['id']}").json()
        self.assertEqual(fetched, {"success": True, "data": created})

    def test_invalid_url_names_field_and_persists_nothing(self):
        res = self.client.post("/api/v1/projects", project_payload(liveLink="not-a-url"), format="json")
        self.assertEqual(res.status_code, 400)
        body = res.json()
        self.assertEqual(body["code"], "validation_error")
        self.assertIn("liveLink", [d["field"] for d in body["details"]])
        self.assertFalse(Project.objects.exists())

    def test_empty_tech_stack_rejected(self):
        res = self.client.post("/api/v1/projects", project_payload(techStack=[]), format="json")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["details"][0]["field"], "techStack")

    def test_blank_link_is_stored_as_null(self):
        res = self.client.post("/api/v1/projects", project_payload(githubLink=""), format="json")
        self.assertEqual(res.status_code, 201)
        self.assertIsNone(Project.objects.get().github_link)

    def test_duplicate_title_is_409(self):
        self.client.post("/api/v1/projects", project_payload(), format="json")
        res = self.client.post("/api/v1/projects", project_payload(), format="json")
        self.assertEqual(res.status_code, 409)
        self.assertEqual(res.json()["code"], "conflict")

    def test_partial_update_keeps_other_fields(self):
        created = self.client.post("/api/v1/projects", project_payload(), format="json").json()["data"]
        res = self.client.put(f"/api/v1/projects/{created['id']}", {"category": "Mobile"}, format="json")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["data"]["category"], "Mobile")
        self.assertEqual(res.json()["data"]["title"], "X")

    def test_partial_update_keeps_format_constraints(self):
        created = self.client.post("/api/v1/projects", project_payload(), format="json").json()["data"]
        res = self.client.put(f"/api/v1/projects/{created['id']}", {"githubLink": "nope"}, format="json")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["details"][0]["field"], "githubLink")

    def test_unknown_and_malformed_ids_are_404(self):
        res = self.client.get("/api/v1/projects/00000000-0000-0000-0000-000000000000")
        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.json()["code"], "not_found")
        self.assertEqual(self.client.put("/api/v1/projects/abc", {"category": "x"}, format="json").status_code, 404)

    def test_delete_returns_record(self):
        created = self.client.post("/api/v1/projects", project_payload(), format="json").json()["data"]
        res = self.client.delete(f"/api/v1/projects/{created['id']}")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["data"]["id"], created["id"])
        self.assertFalse(Project.objects.exists())

    def test_list_order_and_category_filter(self):
        self.client.post("/api/v1/projects", project_payload(title="Old", category="Web"), format="json")
        self.client.post("/api/v1/projects", project_payload(title="New", category="Games"), format="json")
        titles = [p["title"] for p in self.client.get("/api/v1/projects").json()["data"]]
        self.assertEqual(titles, ["New", "Old"])
        filtered = self.client.get("/api/v1/projects", {"category": "web"}).json()["data"]
        self.assertEqual([p["title"] for p in filtered], ["Old"])

    def test_patch_is_not_allowed(self):
        created = self.client.post("/api/v1/projects", project_payload(), format="json").json()["data"]
        res = self.client.patch(f"/api/v1/projects/{created['id']}", {"category": "x"}, format="json")
        self.assertEqual(res.status_code, 405)
        self.assertFalse(res.json()["success"])


class ExperienceAPITests(PortfolioAPITestCase):
    def setUp(self):
        super().setUp()
        self.login_as(self.admin)

    def test_create_requires_roles(self):
        res = self.client.post("/api/v1/experience", experience_payload(roles=[]), format="json")
        self.assertEqual(res.status_code, 400)
        self.assertEqual([d["field"] for d in res.json()["details"]], ["roles"])
        self.assertFalse(Experience.objects.exists())

    def test_put_with_empty_roles_is_rejected(self):
        created = self.client.post("/api/v1/experience", experience_payload(), format="json").json()["data"]
        res = self.client.put(f"/api/v1/experience/{created['id']}", {"roles": []}, format="json")
        self.assertEqual(res.status_code, 400)
        self.assertEqual([d["field"] for d in res.json()["details"]], ["roles"])
        self.assertEqual(ExperienceRole.objects.count(), 2)

    def test_nested_role_error_path(self):
        roles = [{"title": "Engineer", "period": "2020", "description": []}]
        res = self.client.post("/api/v1/experience", experience_payload(roles=roles), format="json")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["details"][0]["field"], "roles.0.description")

    def test_put_with_roles_replaces_them(self):
        created = self.client.post("/api/v1/experience", experience_payload(), format="json").json()["data"]
        self.assertEqual([r["title"] for r in created["roles"]], ["Engineer", "Senior Engineer"])
        res = self.client.put(
            f"/api/v1/experience/{created['id']}",
            {"roles": [{"title": "Staff Engineer", "period": "2023", "description": ["Mentored"]}]},
            format="json",
        )
        self.assertEqual(res.status_code, 200)
        self.assertEqual([r["title"] for r in res.json()["data"]["roles"]], ["Staff Engineer"])
        self.assertEqual(ExperienceRole.objects.count(), 1)

    def test_put_without_roles_keeps_them(self):
        created = self.client.post("/api/v1/experience", experience_payload(), format="json").json()["data"]
        res = self.client.put(f"/api/v1/experience/{created['id']}", {"period": "2020 - 2024"}, format="json")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(len(res.json()["data"]["roles"]), 2)

    def test_put_with_incomplete_role_is_rejected(self):
        created = self.client.post("/api/v1/experience", experience_payload(), format="json").json()["data"]
        res = self.client.put(f"/api/v1/experience/{created['id']}", {"roles": [{"title": "Only title"}]}, format="json")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(ExperienceRole.objects.count(), 2)

    def test_delete_cascades(self):
        created = self.client.post("/api/v1/experience", experience_payload(), format="json").json()["data"]
        res = self.client.delete(f"/api/v1/experience/{created['id']}")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(len(res.json()["data"]["roles"]), 2)
        self.assertFalse(ExperienceRole.objects.exists())


class ActiveFlagListTests(PortfolioAPITestCase):
    def setUp(self):
        super().setUp()
        self.login_as(self.admin)
        self.client.post("/api/v1/skills", {"name": "Python", "category": "Languages", "iconType": "text"}, format="json")
        self.client.post(
            "/api/v1/skills",
            {"name": "Perl", "category": "Languages", "iconType": "text", "isActive": False},
            format="json",
        )

    def test_public_list_hides_inactive(self):
        self.client.credentials()
        names = [s["name"] for s in self.client.get("/api/v1/skills").json()["data"]]
        self.assertEqual(names, ["Python"])

    def test_all_flag_ignored_for_anonymous(self):
        self.client.credentials()
        names = [s["name"] for s in self.client.get("/api/v1/skills", {"all": "true"}).json()["data"]]
        self.assertEqual(names, ["Python"])

    def test_admin_all_flag_includes_inactive(self):
        names = [s["name"] for s in self.client.get("/api/v1/skills", {"all": "true"}).json()["data"]]
        self.assertEqual(names, ["Perl", "Python"])

    def test_skills_ordered_by_category_then_display_order_then_name(self):
        for name, category, order in [("Go", "Backend", 1), ("Rust", "Backend", 0), ("React", "Frontend", 0), ("Django", "Backend", 0)]:
            self.client.post(
                "/api/v1/skills",
                {"name": name, "category": category, "iconType": "text", "displayOrder": order},
                format="json",
            )
        self.client.credentials()
        names = [s["name"] for s in self.client.get("/api/v1/skills").json()["data"]]
        self.assertEqual(names, ["Django", "Rust", "Go", "React", "Python"])

    def test_invalid_icon_type(self):
        res = self.client.post("/api/v1/skills", {"name": "Go", "category": "Languages", "iconType": "svg"}, format="json")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["details"][0]["field"], "iconType")


class EducationAPITests(PortfolioAPITestCase):
    def setUp(self):
        super().setUp()
        for institution, order, active in [("Second", 2, True), ("Hidden", 0, False), ("First", 1, True)]:
            Education.objects.create(
                institution=institution, degree="BSc", period="2015 - 2019", logo="/edu.png",
                core_courses=["Algorithms"], display_order=order, is_active=active,
            )

    def test_public_list_is_active_only_by_display_order(self):
        res = self.client.get("/api/v1/education")
        self.assertEqual(res.status_code, 200)
        self.assertEqual([e["institution"] for e in res.json()["data"]], ["First", "Second"])

    def test_admin_all_flag_includes_inactive(self):
        self.login_as(self.admin)
        res = self.client.get("/api/v1/education", {"all": "true"})
        self.assertEqual([e["institution"] for e in res.json()["data"]], ["Hidden", "First", "Second"])

    def test_negative_display_order_rejected(self):
        self.login_as(self.admin)
        payload = {
            "institution": "X", "degree": "MSc", "period": "2020", "logo": "/x.png",
            "coreCourses": ["ML"], "displayOrder": -1,
        }
        res = self.client.post("/api/v1/education", payload, format="json")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["details"][0]["field"], "displayOrder")


class HonorAPITests(PortfolioAPITestCase):
    def honor(self, title, issued_at):
        return {"title": title, "description": "d", "image": "/h.png", "issuedBy": "Org", "issuedAt": issued_at}

    def setUp(self):
        super().setUp()
        self.login_as(self.admin)

    def test_issued_at_must_be_a_datetime(self):
        res = self.client.post("/api/v1/honors", self.honor("Award", "yesterday"), format="json")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["details"][0]["field"], "issuedAt")
        self.assertFalse(Honor.objects.exists())

    def test_list_newest_issued_first(self):
        self.client.post("/api/v1/honors", self.honor("Old", "2019-05-01T00:00:00Z"), format="json")
        self.client.post("/api/v1/honors", self.honor("Newest", "2024-02-01T00:00:00Z"), format="json")
        self.client.post("/api/v1/honors", self.honor("Middle", "2021-07-15T12:00:00Z"), format="json")
        self.client.credentials()
        titles = [h["title"] for h in self.client.get("/api/v1/honors").json()["data"]]
        self.assertEqual(titles, ["Newest", "Middle", "Old"])

    def test_duplicate_title_is_409(self):
        self.client.post("/api/v1/honors", self.honor("Award", "2024-01-01T00:00:00Z"), format="json")
        res = self.client.post("/api/v1/honors", self.honor("Award", "2024-01-02T00:00:00Z"), format="json")
        self.assertEqual(res.status_code, 409)
        self.assertEqual(res.json()["code"], "conflict")


class SingleActiveAPITests(PortfolioAPITestCase):
    profile = {
        "name": "Me",
        "image": "https://img.example.com/me.png",
        "headlines": ["Engineer"],
        "tagline": "Builds software",
    }
    cv = {
        "title": "CV 2024",
        "description": "Latest",
        "downloadLink": "https://files.example.com/cv.pdf",
        "fileType": "application/pdf",
        "fileSize": 1024,
    }

    def setUp(self):
        super().setUp()
        self.login_as(self.admin)

    def test_public_profile_returns_single_active_or_null(self):
        self.client.credentials()
        self.assertIsNone(self.client.get("/api/v1/public-profile").json()["data"])
        self.login_as(self.admin)
        self.client.post("/api/v1/public-profile", dict(self.profile, name="A"), format="json")
        self.client.post("/api/v1/public-profile", dict(self.profile, name="B"), format="json")
        self.client.credentials()
        self.assertEqual(self.client.get("/api/v1/public-profile").json()["data"]["name"], "B")
        self.assertEqual(PublicProfile.objects.filter(is_active=True).count(), 1)

    def test_put_is_active_true_leaves_exactly_one_active(self):
        first = self.client.post("/api/v1/public-profile", dict(self.profile, name="A"), format="json").json()["data"]
        self.client.post("/api/v1/public-profile", dict(self.profile, name="B"), format="json")
        res = self.client.put(f"/api/v1/public-profile/{first['id']}", {"isActive": True}, format="json")
        self.assertEqual(res.status_code, 200)
        self.assertTrue(res.json()["data"]["isActive"])
        self.assertEqual(list(PublicProfile.objects.filter(is_active=True).values_list("name", flat=True)), ["A"])

    def test_public_profile_all_is_admin_only(self):
        self.client.post("/api/v1/public-profile", self.profile, format="json")
        self.assertEqual(len(self.client.get("/api/v1/public-profile/all").json()["data"]), 1)
        self.client.credentials()
        self.assertEqual(self.client.get("/api/v1/public-profile/all").status_code, 401)

    def test_cv_activate_and_active(self):
        first = self.client.post("/api/v1/cvs", self.cv, format="json").json()["data"]
        self.client.post("/api/v1/cvs", dict(self.cv, title="Older"), format="json")
        res = self.client.post(f"/api/v1/cvs/{first['id']}/activate")
        self.assertEqual(res.status_code, 200)
        self.client.credentials()
        self.assertEqual(self.client.get("/api/v1/cvs/active").json()["data"]["id"], first["id"])
        active_only = self.client.get("/api/v1/cvs", {"isActive": "true"}).json()["data"]
        self.assertEqual([c["id"] for c in active_only], [first["id"]])

    def test_cv_file_metadata_follows_upload_policy(self):
        res = self.client.post("/api/v1/cvs", dict(self.cv, fileType="image/png"), format="json")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["details"][0]["field"], "fileType")
        res = self.client.post("/api/v1/cvs", dict(self.cv, fileSize=11 * 1024 * 1024), format="json")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["details"][0]["field"], "fileSize")
        self.assertFalse(Resume.objects.exists())


# -------------------------------------------------------------------
# Seeding
# -------------------------------------------------------------------
@override_settings(ADMIN_EMAIL="owner@example.com", ADMIN_PASSWORD="S3cure-pass!")
class SeedCommandTests(TestCase):
    payload = {
        "projects": [
            {"title": "P1", "description": "d", "techStack": ["Go"], "images": ["/p1.png"], "category": "Web"},
        ],
        "honors": [
            {"title": "H1", "description": "d", "image": "/h1.png", "issuedBy": "Org", "issuedAt": "2024-01-01T00:00:00Z"},
        ],
        "experience": [experience_payload()],
    }

    def run_seed(self, payload):
        with tempfile.NamedTemporaryFile("w", suffix=".json", delete=False) as fh:
            json.dump(payload, fh)
        self.addCleanup(os.unlink, fh.name)
        call_command("seed_portfolio", "--file", fh.name, stdout=StringIO())

    def test_seed_is_idempotent(self):
        self.run_seed(self.payload)
        self.run_seed(self.payload)
        self.assertEqual(Project.objects.count(), 1)
        self.assertEqual(Honor.objects.count(), 1)
        self.assertEqual(Experience.objects.count(), 1)
        self.assertEqual(ExperienceRole.objects.count(), 2)
        admin = User.objects.get(email="owner@example.com")
        self.assertTrue(admin.is_admin)

    def test_default_seed_file_loads(self):
        call_command("seed_portfolio", stdout=StringIO())
        self.assertTrue(Project.objects.exists())
