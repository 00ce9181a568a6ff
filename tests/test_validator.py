"""Tests for prompt quality validation."""

FULL_PROMPT = (
    "## Context\n"
    "TaskFlow is a task management dashboard for small teams.\n\n"
    "## Requirements\n"
    "- Users can create, assign and complete tasks\n"
    "- Tasks sync in real time across devices\n\n"
    "## Technical Details\n"
    "React with TypeScript on the frontend and Supabase for auth and storage.\n\n"
    "## UI Specifications\n"
    "A sidebar with projects, a kanban board and a compact mobile layout.\n"
)


def test_short_prompt_scores_zero():
    from prompt_pipeline.validation import validate_prompt
    from prompt_pipeline.validation.prompt_validator import IMPROVEMENT_SUGGESTIONS

    result = validate_prompt("short")

    assert result.score == 0
    assert result.is_valid is False
    assert result.issues == [
        "Missing context section",
        "Missing requirements section",
        "Missing technical section",
        "Missing ui section",
        "Prompt is too short",
    ]
    assert result.suggestions == list(IMPROVEMENT_SUGGESTIONS)


def test_complete_prompt_scores_full_marks():
    from prompt_pipeline.validation import validate_prompt

    assert len(FULL_PROMPT) >= 200
    result = validate_prompt(FULL_PROMPT)

    assert result.score == 100
    assert result.is_valid is True
    assert result.issues == []
    assert result.suggestions == []


def test_long_prompt_penalty():
    from prompt_pipeline.validation import validate_prompt

    text = FULL_PROMPT + "\n" + ("Each task has a title and a due date. " * 60)
    result = validate_prompt(text)

    assert len(text) > 2000
    assert result.score == 95
    assert "Prompt might be too long" in result.issues


def test_vague_language_penalty():
    from prompt_pipeline.validation import validate_prompt
    from prompt_pipeline.validation.prompt_validator import count_vague_words

    text = FULL_PROMPT + "Make it nice, good, better and improve the rest.\n"
    result = validate_prompt(text)

    assert count_vague_words(text) == 4
    assert result.score == 90
    assert "Prompt contains vague language" in result.issues


def test_three_vague_words_are_tolerated():
    from prompt_pipeline.validation import validate_prompt

    assert validate_prompt(FULL_PROMPT + "Nice, good and better.\n").score == 100


def test_passing_threshold():
    from prompt_pipeline.validation import validate_prompt

    # context, technical and ui present; requirements missing
    text = "Context for the technical UI of the backend service. " * 5
    result = validate_prompt(text)

    assert "requirements" not in text.lower()
    assert result.score == 75
    assert result.is_valid is True


def test_to_dict():
    from prompt_pipeline.validation import validate_prompt

    data = validate_prompt("short").to_dict()
    assert set(data) == {"is_valid", "score", "issues", "suggestions"}
