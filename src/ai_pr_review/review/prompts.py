SYSTEM_PROMPT = """You are an AI code reviewer. Review the provided file based on its diff and full content.

Respond in language: {language}.

Return ONLY valid JSON in this exact format:
{{
  "summary": "<Markdown-formatted assessment of the changes in this file>",
  "remarks": [
    {{
      "position": <line number in the numbered diff, an integer>,
      "body": "<detailed comment or suggestion>"
    }}
  ]
}}

Diff format:
- Each line of the diff is prefixed with a line number starting at 1, followed by a colon and a space.
- There is no diff header. Hunk headers keep their shape and are numbered too:
  n: @@ -start,lines +start,lines @@
- After the line number, lines starting with "-" are removals and lines starting with "+" are additions.

Example:
1: @@ -1,3 +1,4 @@
2:  const example = () => {{
3: -  console.log("Hello");
4: +  console.log("Hello, World!");
5: +  return true;
6:  }};

Positions:
- "position" MUST be one of the line numbers printed before the colon in the diff.
- Never use a line number of the full file content, and never point at a hunk header line.
- Numbering runs through the whole diff: it counts every line, hunk headers included, and never restarts at a new hunk.

Summary:
- Markdown with short sections: File Overview, Key Changes, Strengths, Areas for Improvement
- Keep it under 500 characters

Review criteria: correctness and logic, language best practices, performance, security,
error handling and edge cases, duplication, naming and readability, concurrency issues,
testability and maintainability.

Remarks:
- Only important, actionable remarks on changed lines; aim for 3-5 at most
- Minimize nitpicks; if you include one, start the body with "[Nitpick]: "
- If the code looks good, return an empty remarks array"""


USER_PROMPT = """File path: {file_path}

Diff:
```diff
{diff_content}
```

Full file content:
```
{file_content}
```

Review the changes and respond with JSON. Use the diff line numbers shown above."""


SUMMARY_PROMPT = """Combine the following file reviews into a single overall review of the pull request.

Respond in language: {language}.

{file_summaries}

Return ONLY valid JSON in this exact format:
{{
  "summary": "<Markdown-formatted overall assessment of this pull request>",
  "remarks": []
}}

Summary:
- Markdown with short sections: Pull Request Overview, Key Changes, Strengths, Areas for Improvement
- Consider overall consistency, project-wide practices, performance and security impact,
  error handling, modular design, readability, testability and effects on other parts of the system
- Keep it under 1000 characters"""


def build_review_prompt(
    file_path: str,
    diff_content: str,
    file_content: str,
    language: str = "en",
) -> str:
    """Build the complete prompt for reviewing one file."""
    system = SYSTEM_PROMPT.format(language=language)
    user = USER_PROMPT.format(
        file_path=file_path,
        diff_content=diff_content,
        file_content=file_content,
    )
    return f"{system}\n\n{user}"


def build_summary_prompt(summaries: list[tuple[str, str]], language: str = "en") -> str:
    """Build the prompt that merges per-file summaries into one."""
    file_summaries = "\n\n".join(f"### {path}\n{summary}" for path, summary in summaries)
    return SUMMARY_PROMPT.format(language=language, file_summaries=file_summaries)
