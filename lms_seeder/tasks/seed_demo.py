"""
LMS Seeder - Demo course

Seeds one demo course with a practice module and a test module, each holding
an MCQ and a coding assessment. Every row is found-or-inserted on its natural
key, so repeated runs leave existing rows untouched.

Hierarchy: courses → modules → assessments → mcq_questions
                                         └→ coding_questions → test_cases
"""
import logging

from lms_seeder.core.config import Settings
from lms_seeder.core.store import Row, StoreClient

logger = logging.getLogger(__name__)

DEMO_COURSE = {
    "title": "Demo Course",
    "description": "Sample course for LMS demo",
    "category": "general",
    "is_published": True,
}

MCQ_QUESTIONS = [
    {"question_text": "What is 2 + 2?", "option_a": "3", "option_b": "4", "option_c": "5",
     "option_d": "22", "correct_option": "b", "marks": 1},
    {"question_text": "Capital of France?", "option_a": "Berlin", "option_b": "Madrid",
     "option_c": "Paris", "option_d": "Rome", "correct_option": "c", "marks": 1},
    {"question_text": "JS type of []?", "option_a": "object", "option_b": "array",
     "option_c": "list", "option_d": "tuple", "correct_option": "a", "marks": 1},
]

CODING_QUESTION = {
    "title": "Sum Two Numbers",
    "description": "Read two integers and print their sum.",
    "difficulty": "easy",
    "marks": 20,
    "starter_code": "",
}

TEST_CASES = [
    {"input": "2 3", "expected_output": "5\n", "is_hidden": False, "weightage": 10},
    {"input": "10 20", "expected_output": "30\n", "is_hidden": True, "weightage": 10},
]

LANGUAGES = ["javascript", "python"]


def _mcq_assessment(title: str, module_id, is_practice: bool) -> Row:
    row = {"title": title, "type": "mcq", "module_id": module_id, "is_practice": is_practice,
           "total_marks": 10, "passing_marks": 5}
    if is_practice:
        row["show_results_immediately"] = True
    return row


def _coding_assessment(title: str, module_id, is_practice: bool) -> Row:
    return {"title": title, "type": "coding", "module_id": module_id, "is_practice": is_practice,
            "total_marks": 20, "passing_marks": 10, "allowed_languages": LANGUAGES}


async def _seed_mcq(store: StoreClient, assessment_id) -> None:
    for question in MCQ_QUESTIONS:
        await store.find_or_insert(
            "mcq_questions", {**question, "assessment_id": assessment_id},
            ["question_text", "assessment_id"],
        )


async def _seed_coding(store: StoreClient, assessment_id) -> None:
    question = await store.find_or_insert(
        "coding_questions", {**CODING_QUESTION, "assessment_id": assessment_id},
        ["title", "assessment_id"],
    )
    for case in TEST_CASES:
        await store.find_or_insert(
            "test_cases", {**case, "coding_question_id": question["id"]},
            ["coding_question_id", "input"],
        )


async def seed_demo(store: StoreClient) -> Row:
    """Seed the demo course tree. Any StoreError propagates and aborts the run."""
    course = await store.find_or_insert("courses", DEMO_COURSE, ["title"])

    practice = await store.find_or_insert(
        "modules", {"title": "Practice Module", "course_id": course["id"], "order_index": 0},
        ["title", "course_id"],
    )
    test = await store.find_or_insert(
        "modules", {"title": "Test Module", "course_id": course["id"], "order_index": 1},
        ["title", "course_id"],
    )

    keys = ["title", "module_id"]
    practice_mcq = await store.find_or_insert(
        "assessments", _mcq_assessment("Practice MCQ", practice["id"], True), keys)
    practice_code = await store.find_or_insert(
        "assessments", _coding_assessment("Practice Coding", practice["id"], True), keys)
    test_mcq = await store.find_or_insert(
        "assessments", _mcq_assessment("Test MCQ", test["id"], False), keys)
    test_code = await store.find_or_insert(
        "assessments", _coding_assessment("Test Coding", test["id"], False), keys)

    await _seed_mcq(store, practice_mcq["id"])
    await _seed_mcq(store, test_mcq["id"])
    await _seed_coding(store, practice_code["id"])
    await _seed_coding(store, test_code["id"])

    logger.info("Seeded demo course with practice/test assessments.")
    return course


async def run(settings: Settings, store: StoreClient | None = None) -> Row:
    if store is not None:
        return await seed_demo(store)
    async with StoreClient(settings) as client:
        return await seed_demo(client)
