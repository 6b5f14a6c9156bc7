import pytest
from ai_pr_review.review.prompts import build_review_prompt, build_summary_prompt


NUMBERED_DIFF = "1: @@ -1,2 +1,3 @@\n2:  const x = 1;\n3: +const y = 2;"


def test_build_prompt_includes_file_content():
    prompt = build_review_prompt(
        file_path="src/main.js",
        diff_content=NUMBERED_DIFF,
        file_content="const x = 1;\nconst y = 2;",
    )

    assert "src/main.js" in prompt
    assert "const x = 1;\nconst y = 2;" in prompt
    assert "3: +const y = 2;" in prompt


def test_build_prompt_describes_response_schema():
    prompt = build_review_prompt(
        file_path="main.py",
        diff_content="1: @@ -0,0 +1 @@\n2: +x = 1",
        file_content="x = 1",
    )

    assert '"summary"' in prompt
    assert '"remarks"' in prompt
    assert '"position"' in prompt
    assert '"body"' in prompt
    assert "hunk header" in prompt.lower()


def test_build_prompt_includes_language():
    prompt = build_review_prompt(
        file_path="main.py",
        diff_content="1: @@ -0,0 +1 @@\n2: +x = 1",
        file_content="x = 1",
        language="ru",
    )

    assert "Respond in language: ru" in prompt


def test_build_prompt_is_deterministic():
    args = dict(file_path="a.py", diff_content=NUMBERED_DIFF, file_content="{braces} stay")

    assert build_review_prompt(**args) == build_review_prompt(**args)
    assert "{braces} stay" in build_review_prompt(**args)


def test_build_summary_prompt_lists_each_file():
    prompt = build_summary_prompt([("a.py", "Adds a helper."), ("b.py", "Fixes {a} typo.")])

    assert "### a.py\nAdds a helper." in prompt
    assert "### b.py\nFixes {a} typo." in prompt
    assert '"remarks": []' in prompt


def test_build_prompt_numbering_runs_through_all_hunks():
    prompt = build_review_prompt(file_path="a.py", diff_content=NUMBERED_DIFF, file_content="")

    assert "never restarts at a new hunk" in prompt
    assert "after the most recent hunk header" not in prompt
