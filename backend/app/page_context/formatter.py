"""
Prompt formatting for resolved page context.
"""


def format_for_prompt(instructions: str, current_url: str) -> str:
    """Wrap resolved instructions and the page URL ahead of a task block"""
    return (
        "## Page Context\n"
        "\n"
        f"**Current URL**: {current_url}\n"
        "\n"
        f"{instructions}\n"
        "\n"
        "---\n"
        "\n"
        "## Task"
    )
