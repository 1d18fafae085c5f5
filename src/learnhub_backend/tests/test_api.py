"""
HTTP-level tests through FastAPI's TestClient against an in-memory database.
"""

from datetime import datetime, timedelta, timezone

from learnhub_backend.auth.security import create_access_token
from learnhub_backend.model.job import Job
from learnhub_backend.tests.fixtures import (
    auth_headers, enroll, make_course, make_lesson, make_quiz, make_user,
)


JOB = {
    "title": "Backend Developer",
    "company": "ACME",
    "location": "Remote",
    "description": "Build and operate the services behind our learning platform.",
    "application_link": "https://acme.example.com/jobs/1",
}


class TestAuthRoutes:

    def test_register_login_me(self, client):
        response = client.post("/auth/register", json={
            "name": "Ada", "email": "Ada@Example.com", "password": "secret123",
        })
        assert response.status_code == 201
        assert response.json()["user"]["role"] == "student"
        assert "password" not in response.json()["user"]

        response = client.post("/auth/login", json={"email": "ada@example.com", "password": "secret123"})
        assert response.status_code == 200
        token = response.json()["access_token"]

        response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        assert response.json()["email"] == "ada@example.com"

    def test_duplicate_registration(self, client):
        payload = {"name": "Ada", "email": "ada@example.com", "password": "secret123"}
        client.post("/auth/register", json=payload)

        response = client.post("/auth/register", json=payload)

        assert response.status_code == 400
        assert response.json() == {"kind": "Conflict", "detail": "User already exists"}

    def test_admin_cannot_self_register(self, client):
        response = client.post("/auth/register", json={
            "name": "Eve", "email": "eve@example.com", "password": "secret123", "role": "admin",
        })
        assert response.status_code == 403

    def test_bad_credentials(self, client, test_db):
        user = make_user(test_db, "student")

        response = client.post("/auth/login", json={"email": user.email, "password": "wrong"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    def test_profile_update(self, client, test_db):
        user = make_user(test_db, "student")

        response = client.put("/auth/me", json={"bio": "Learning things"}, headers=auth_headers(user))

        assert response.status_code == 200
        assert response.json()["bio"] == "Learning things"
        assert response.json()["role"] == "student"

    def test_garbage_token(self, client):
        response = client.get("/auth/me", headers={"Authorization": "Bearer nonsense"})
        assert response.status_code == 401
        assert response.json()["kind"] == "Unauthorized"


class TestCourseRoutes:

    def test_catalog_is_public(self, client, test_db):
        instructor = make_user(test_db, "instructor")
        course = make_course(test_db, instructor)
        make_lesson(test_db, course)

        assert client.get("/courses").json()[0]["id"] == course.id
        assert client.get(f"/courses/{course.id}").status_code == 200
        lessons = client.get(f"/courses/{course.id}/lessons").json()
        assert len(lessons) == 1
        assert "content" not in lessons[0]

    def test_create_requires_authentication(self, client):
        response = client.post("/courses", json={
            "title": "T", "description": "D", "category": "Programming", "price": 0,
        })
        assert response.status_code == 401

    def test_non_owner_update_forbidden_admin_allowed(self, client, test_db):
        owner = make_user(test_db, "instructor")
        other = make_user(test_db, "instructor")
        admin = make_user(test_db, "admin")
        course = make_course(test_db, owner)

        response = client.put(f"/courses/{course.id}", json={"title": "Mine now"}, headers=auth_headers(other))
        assert response.status_code == 403
        assert response.json()["kind"] == "Forbidden"

        response = client.put(f"/courses/{course.id}", json={"title": "Fixed"}, headers=auth_headers(admin))
        assert response.status_code == 200
        assert response.json()["title"] == "Fixed"

    def test_taught_courses_route_is_not_shadowed(self, client, test_db):
        owner = make_user(test_db, "instructor")
        course = make_course(test_db, owner)

        response = client.get("/courses/my-taught-courses", headers=auth_headers(owner))

        assert response.status_code == 200
        assert [c["id"] for c in response.json()] == [course.id]

    def test_missing_course(self, client):
        response = client.get("/courses/does-not-exist")
        assert response.status_code == 404
        assert response.json() == {"kind": "NotFound", "detail": "Course not found"}

    def test_stale_token_does_not_block_public_reads(self, client, test_db):
        instructor = make_user(test_db, "instructor")
        course = make_course(test_db, instructor)
        expired = {"Authorization": f"Bearer {create_access_token(instructor.id, instructor.role, timedelta(minutes=-5))}"}

        response = client.get("/courses", headers=expired)
        assert response.status_code == 200
        assert [c["id"] for c in response.json()] == [course.id]
        assert client.get(f"/courses/{course.id}", headers={"Authorization": "Bearer nonsense"}).status_code == 200
        assert client.get("/jobs", headers=expired).status_code == 200

        # protected routes still refuse the same token
        assert client.get("/courses/my-taught-courses", headers=expired).status_code == 401

    def test_invalid_category_is_unprocessable(self, client, test_db):
        owner = make_user(test_db, "instructor")
        response = client.post("/courses", headers=auth_headers(owner), json={
            "title": "T", "description": "D", "category": "Cooking", "price": 0,
        })
        assert response.status_code == 422
        assert response.json()["kind"] == "ValidationError"


class TestLearningFlow:

    def test_enroll_view_submit_progress(self, client, test_db):
        instructor = make_user(test_db, "instructor")
        student = make_user(test_db, "student")
        course = make_course(test_db, instructor)
        lesson = make_lesson(test_db, course)
        quiz = make_quiz(test_db, lesson, answers=["A", "B"])
        q1, q2 = [q.id for q in quiz.questions]
        headers = auth_headers(student)

        # not enrolled yet
        response = client.get(f"/quizzes/{quiz.id}", headers=headers)
        assert response.status_code == 403
        assert "enroll" in response.json()["detail"]

        response = client.post(f"/enrollments/{student.id}/{course.id}", headers=headers)
        assert response.status_code == 200
        assert response.json()["enrolled_courses"] == [course.id]

        response = client.post(f"/enrollments/{student.id}/{course.id}", headers=headers)
        assert response.status_code == 400
        assert response.json()["kind"] == "Conflict"

        response = client.get(f"/quizzes/{quiz.id}", headers=headers)
        assert response.status_code == 200
        assert all("correct_answer" not in q for q in response.json()["questions"])

        response = client.post(f"/quizzes/{quiz.id}/submit", headers=headers, json={"answers": {q1: "A", q2: "C"}})
        assert response.status_code == 200
        result = response.json()
        assert result["correct_count"] == 1
        assert result["score"] == 50.0
        assert result["results"][1]["correct_answer"] == "B"
        assert result["results"][1]["is_correct"] is False
        assert result["user_progress"]["completed"] is True

        response = client.get(f"/progress/course/{course.id}", headers=headers)
        assert response.status_code == 200
        assert response.json()["completed_lessons"] == 1
        assert response.json()["percentage"] == 100.0

        response = client.get(f"/enrollments/check/{student.id}/{course.id}", headers=headers)
        assert response.json() == {"is_enrolled": True}

        response = client.get("/enrollments/my-courses", headers=headers)
        assert [c["id"] for c in response.json()] == [course.id]

        response = client.delete(f"/enrollments/{student.id}/{course.id}", headers=headers)
        assert response.status_code == 200
        assert response.json()["enrolled_courses"] == []

    def test_admin_cannot_enroll_a_student(self, client, test_db):
        admin = make_user(test_db, "admin")
        student = make_user(test_db, "student")
        course = make_course(test_db, make_user(test_db, "instructor"))

        response = client.post(f"/enrollments/{student.id}/{course.id}", headers=auth_headers(admin))

        assert response.status_code == 403

    def test_complete_lesson(self, client, test_db):
        student = make_user(test_db, "student")
        course = make_course(test_db, make_user(test_db, "instructor"))
        lesson = make_lesson(test_db, course)

        response = client.post(f"/progress/complete-lesson/{lesson.id}", headers=auth_headers(student))

        assert response.status_code == 200
        assert response.json()["lesson_id"] == lesson.id
        assert response.json()["course_id"] == course.id

    def test_lesson_content_for_enrolled_student(self, client, test_db):
        student = make_user(test_db, "student")
        course = make_course(test_db, make_user(test_db, "instructor"))
        lesson = make_lesson(test_db, course)

        assert client.get(f"/lessons/{lesson.id}", headers=auth_headers(student)).status_code == 403
        enroll(test_db, student, course)
        response = client.get(f"/lessons/{lesson.id}", headers=auth_headers(student))
        assert response.status_code == 200
        assert response.json()["content"] == "Secret lesson content"

    def test_course_delete_cascades(self, client, test_db):
        instructor = make_user(test_db, "instructor")
        student = make_user(test_db, "student")
        course = make_course(test_db, instructor)
        lesson = make_lesson(test_db, course)
        enroll(test_db, student, course)
        client.post(f"/progress/complete-lesson/{lesson.id}", headers=auth_headers(student))

        response = client.delete(f"/courses/{course.id}", headers=auth_headers(instructor))

        assert response.status_code == 200
        assert client.get(f"/courses/{course.id}").status_code == 404
        assert client.get("/enrollments/my-courses", headers=auth_headers(student)).json() == []


class TestJobAndStorybookRoutes:

    def test_job_lifecycle(self, client, test_db):
        instructor = make_user(test_db, "instructor")
        other = make_user(test_db, "instructor")

        response = client.post("/jobs", json=JOB, headers=auth_headers(instructor))
        assert response.status_code == 201
        job_id = response.json()["id"]
        assert response.json()["posted_by"] == instructor.id

        assert client.get(f"/jobs/{job_id}").status_code == 200
        assert client.put(f"/jobs/{job_id}", json={"title": "Nope"}, headers=auth_headers(other)).status_code == 403

        response = client.get("/jobs/my", headers=auth_headers(instructor))
        assert [j["id"] for j in response.json()] == [job_id]

        response = client.put(f"/jobs/{job_id}", json={"application_link": None}, headers=auth_headers(instructor))
        assert response.status_code == 400
        assert response.json()["kind"] == "ValidationError"

        assert client.delete(f"/jobs/{job_id}", headers=auth_headers(instructor)).status_code == 200
        assert client.get(f"/jobs/{job_id}").status_code == 404

    def test_job_search_newest_first(self, client, test_db):
        poster = make_user(test_db, "instructor")
        now = datetime.now(timezone.utc)
        for days, title in [(3, "Python Engineer"), (1, "Data Analyst"), (2, "Senior Python Developer")]:
            test_db.add(Job(posted_by=poster.id, posted_at=now - timedelta(days=days), **dict(JOB, title=title)))
        test_db.commit()

        response = client.get("/jobs", params={"keyword": "python"})

        body = response.json()
        assert body["total"] == 2
        assert [job["title"] for job in body["data"]] == ["Senior Python Developer", "Python Engineer"]

        response = client.get("/jobs", params={"limit": 1, "skip": 1})
        assert response.json()["count"] == 1
        assert response.json()["total"] == 3
        assert response.json()["data"][0]["title"] == "Senior Python Developer"

    def test_storybooks_admin_only(self, client, test_db):
        admin = make_user(test_db, "admin")
        instructor = make_user(test_db, "instructor")
        student = make_user(test_db, "student")
        payload = {"title": "Tales", "pdf_url": "https://cdn.example.com/tales.pdf"}

        assert client.post("/storybooks", json=payload, headers=auth_headers(instructor)).status_code == 403
        response = client.post("/storybooks", json=payload, headers=auth_headers(admin))
        assert response.status_code == 201

        assert client.get("/storybooks").status_code == 401
        books = client.get("/storybooks", headers=auth_headers(student)).json()
        assert [b["title"] for b in books] == ["Tales"]


class TestNullUpdates:

    def test_quiz_title_null_is_a_validation_error(self, client, test_db):
        instructor = make_user(test_db, "instructor")
        quiz = make_quiz(test_db, make_lesson(test_db, make_course(test_db, instructor)))

        response = client.put(f"/quizzes/{quiz.id}", json={"title": None}, headers=auth_headers(instructor))

        assert response.status_code == 422
        assert response.json()["kind"] == "ValidationError"
        assert client.get(f"/quizzes/{quiz.id}", headers=auth_headers(instructor)).json()["title"] == "Checkpoint"

    def test_job_required_field_null_is_a_validation_error(self, client, test_db):
        instructor = make_user(test_db, "instructor")
        job_id = client.post("/jobs", json=JOB, headers=auth_headers(instructor)).json()["id"]

        response = client.put(f"/jobs/{job_id}", json={"company": None}, headers=auth_headers(instructor))

        assert response.status_code == 422
        assert response.json()["kind"] == "ValidationError"
        assert client.get(f"/jobs/{job_id}").json()["company"] == "ACME"

    def test_profile_name_null_is_a_validation_error(self, client, test_db):
        student = make_user(test_db, "student", name="Ada")

        response = client.put("/auth/me", json={"name": None}, headers=auth_headers(student))

        assert response.status_code == 422
        assert response.json()["kind"] == "ValidationError"
        assert client.get("/auth/me", headers=auth_headers(student)).json()["name"] == "Ada"
