from __future__ import annotations

from enum import Enum

from prompt_relay.domain.exceptions import InvalidInput, InvalidTask


class Task(str, Enum):
    SUMMARY = "summary"
    GRAMMAR = "grammar"
    TAGS = "tags"
    TRANSLATE = "translate"
    TERMS = "terms"
    DEFINE = "define"
    DETAILED_DEFINE = "detailed-define"


# Placeholders are substituted with str.replace, never str.format, so braces in
# user content are copied through literally.
PROMPT_TEMPLATES: dict[Task, str] = {
    Task.SUMMARY: (
        "Please provide a concise 2-3 sentence summary of the following text:\n\n{content}"
    ),
    Task.GRAMMAR: (
        "Please check the following text for grammar errors and provide suggestions "
        "for improvement:\n\n{content}"
    ),
    Task.TAGS: (
        "Based on the following text, suggest 5 relevant tags (single words or short phrases). "
        "Return only the tags separated by commas:\n\n{content}"
    ),
    Task.TRANSLATE: (
        "Translate the following text to {language}. Maintain the original meaning and tone. "
        "Only return the translated text without any additional comments:\n\n{content}"
    ),
    Task.TERMS: (
        "Identify 8-10 key technical terms, concepts, or important words from the following "
        "text. Return only the terms separated by commas:\n\n{content}"
    ),
    Task.DEFINE: (
        'Provide a brief, clear definition (1-2 sentences maximum) for the term: "{content}". '
        "Focus on the most relevant meaning in context."
    ),
    Task.DETAILED_DEFINE: (
        'Provide a comprehensive but concise explanation of the term: "{content}". '
        "Include its definition, context, and why it's important. "
        "Keep it informative but not too lengthy (3-4 sentences maximum)."
    ),
}

SUPPORTED_TASKS: tuple[str, ...] = tuple(task.value for task in Task)


def parse_task(task: str) -> Task:
    try:
        return Task(task)
    except ValueError:
        raise InvalidTask(
            f"Invalid task. Supported tasks: {', '.join(SUPPORTED_TASKS)}"
        ) from None


def resolve_prompt(task: str | Task, content: str, language: str | None = None) -> str:
    """Render the canned prompt for `task`.

    Raises InvalidTask for unknown tasks and InvalidInput when `translate` has no language.
    """

    resolved = task if isinstance(task, Task) else parse_task(task)
    template = PROMPT_TEMPLATES[resolved]

    if resolved is Task.TRANSLATE:
        if not language:
            raise InvalidInput("Language is required for translation")
        # Split around {content} first so a "{content}" inside the language name stays literal.
        head, tail = template.split("{content}")
        return head.replace("{language}", language) + content + tail

    head, tail = template.split("{content}")
    return head + content + tail
