from __future__ import annotations

# Output token budgets per answer shape.
YES_NO_MAX_TOKENS = 2
LANGUAGE_MAX_TOKENS = 3
KEYWORDS_MAX_TOKENS = 60
SUMMARY_MAX_TOKENS = 250
CHAT_MAX_TOKENS = 1000

Messages = list[dict[str, str]]


def build_need_to_summarize_messages(*, question: str, summary: str) -> Messages:
    """
    Messages for the yes/no "can the summary answer this?" classifier.

    Specific questions (about a part or a subject of the content) get "No"; general
    questions that could be answered from the summary get "Yes".
    """

    system_prompt = "\n".join(
        [
            "You are an assistant answering questions about a large content.",
            "You will receive a content summary and a user question.",
            "If the question is specific, meaning it asks you about a part of the content "
            'or a subject of the content, answer "No".',
            "If the question is general, meaning it lacks precision, asks to create content "
            'and could be answered with the summary received, answer "Yes".',
            'Answer strictly with "Yes" or "No".',
        ]
    )
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": f'Summary: "{summary}" Question: "{question}".'},
    ]


def build_language_messages(*, text: str, default: str) -> Messages:
    return [
        {
            "role": "system",
            "content": (
                "You will receive a Text. Please respond with just one word, the language of "
                f'the Text provided. If you are unsure reply with: "{default}".'
            ),
        },
        {"role": "user", "content": f'Text: "{text}"'},
    ]


def build_keywords_messages(*, text: str, language: str) -> Messages:
    return [
        {
            "role": "system",
            "content": "You are an assistant that generates keywords from the provided Text.",
        },
        {
            "role": "system",
            "content": (
                "Answer strictly with a string containing words separated by commas. "
                "No extra characters or explanations."
            ),
        },
        {"role": "system", "content": f"Answer strictly in {language}."},
        {"role": "user", "content": f"Generate up to ten keywords for this text:\n\n{text}"},
    ]


def build_summary_messages(*, text: str) -> Messages:
    return [
        {"role": "system", "content": "You are an assistant that summarizes text."},
        {"role": "user", "content": f"Summarize this text as concisely as possible:\n\n{text}"},
    ]
