"""
DTO validation tests.
"""

import pytest
from pydantic import ValidationError

from learnhub_backend.interface.grading import QuizSubmission
from learnhub_backend.interface.jobs import JobCreate, JobUpdate
from learnhub_backend.interface.lessons import LessonCreate
from learnhub_backend.interface.quizzes import QuizCreate, QuizQuestionCreate, QuizUpdate
from learnhub_backend.interface.users import UserRegister, UserUpdate
from learnhub_backend.permissions.principal import Principal, Role


class TestQuizDTOs:

    def test_valid_question(self):
        question = QuizQuestionCreate(question_text="  Pick one ", options=["a", "b"], correct_answer="b")
        assert question.question_text == "Pick one"

    def test_fewer_than_two_options(self):
        with pytest.raises(ValidationError):
            QuizQuestionCreate(question_text="Q", options=["a"], correct_answer="a")

    def test_duplicate_options(self):
        with pytest.raises(ValidationError):
            QuizQuestionCreate(question_text="Q", options=["a", "a"], correct_answer="a")

    def test_answer_must_be_an_option(self):
        with pytest.raises(ValidationError) as exc_info:
            QuizQuestionCreate(question_text="Q", options=["a", "b"], correct_answer="c")
        assert "not one of the provided options" in str(exc_info.value)

    def test_quiz_needs_questions(self):
        with pytest.raises(ValidationError):
            QuizCreate(lesson_id="l1", title="Empty", questions=[])

    def test_update_with_empty_question_list(self):
        with pytest.raises(ValidationError):
            QuizUpdate(questions=[])
        assert QuizUpdate(title="Only title").questions is None

    def test_update_title_cannot_be_null(self):
        with pytest.raises(ValidationError):
            QuizUpdate(title=None)
        assert QuizUpdate(description=None).description is None


class TestQuizSubmission:

    def test_mapping_form(self):
        submission = QuizSubmission(answers={"q1": "A", "q2": None})
        assert submission.answers == {"q1": "A", "q2": None}

    def test_list_form(self):
        submission = QuizSubmission(answers=[
            {"question_id": "q1", "selected_option": "A"},
            {"questionId": "q2", "selectedOption": "B"},
            {"question_id": "q3"},
        ])
        assert submission.answers == {"q1": "A", "q2": "B", "q3": None}

    def test_list_form_requires_question_id(self):
        with pytest.raises(ValidationError):
            QuizSubmission(answers=[{"selected_option": "A"}])

    def test_defaults_to_no_answers(self):
        assert QuizSubmission().answers == {}


class TestOtherDTOs:

    def test_register_normalizes_email_and_defaults_role(self):
        user = UserRegister(name=" Ada ", email="Ada@Example.COM", password="secret1")
        assert user.email == "ada@example.com"
        assert user.name == "Ada"
        assert user.role == Role.STUDENT

    def test_register_rejects_short_password(self):
        with pytest.raises(ValidationError):
            UserRegister(name="Ada", email="ada@example.com", password="123")

    def test_profile_update_cannot_change_role(self):
        with pytest.raises(ValidationError):
            UserUpdate(role="admin")

    def test_profile_name_cannot_be_null(self):
        with pytest.raises(ValidationError):
            UserUpdate(name=None)
        assert UserUpdate(bio=None).model_dump(exclude_unset=True) == {"bio": None}

    def test_job_update_required_fields_cannot_be_null(self):
        for field in ("title", "company", "location", "description"):
            with pytest.raises(ValidationError):
                JobUpdate(**{field: None})
        assert JobUpdate(application_link=None).application_link is None

    def test_job_needs_an_application_channel(self):
        with pytest.raises(ValidationError):
            JobCreate(title="Dev", company="ACME", location="Remote", description="x" * 60)
        job = JobCreate(title="Dev", company="ACME", location="Remote", description="x" * 60,
                        application_email="jobs@acme.com")
        assert job.job_type == "Full-time"

    def test_job_description_minimum_length(self):
        with pytest.raises(ValidationError):
            JobCreate(title="Dev", company="ACME", location="Remote", description="too short",
                      application_link="https://acme.com/jobs")

    def test_lesson_order_not_negative(self):
        with pytest.raises(ValidationError):
            LessonCreate(title="Intro", description="Start", order=-1)

    def test_lesson_urls(self):
        assert LessonCreate(title="Intro", description="Start", video_url="").video_url == ""
        with pytest.raises(ValidationError):
            LessonCreate(title="Intro", description="Start", video_url="not a url")


class TestPrincipal:

    def test_role_is_normalized(self):
        assert Principal(user_id="u1", role=" Admin ").is_admin

    def test_role_requires_user_id(self):
        with pytest.raises(ValidationError):
            Principal(role="student")

    def test_anonymous(self):
        principal = Principal.anonymous()
        assert not principal.is_authenticated
        assert not principal.is_owner(None)
