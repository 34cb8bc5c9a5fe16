"""
Context for the AI assistant panel.

The assistant itself lives outside the interpreter. The only things it is
given are the current directory and the last command typed, folded into a
prompt by ``build_prompt``.
"""

from typing import Optional


SYSTEM_PREAMBLE = (
    "You are the Neural Engine for an AI-powered Linux terminal. Provide concise, "
    "practical answers about Linux commands and system administration."
)

RESPONSE_GUIDANCE = (
    "Keep responses short and actionable. Include specific commands when relevant. "
    "Be direct and helpful."
)


def build_prompt(question: str, current_directory: str,
                 last_command: Optional[str] = None) -> str:
    """Compose the context-aware prompt for a user question."""
    context = f"Current directory: {current_directory}"
    if last_command:
        context += f". Last command: {last_command}"
    return f"{SYSTEM_PREAMBLE} {context}.\n\nQuestion: {question.strip()}\n\n{RESPONSE_GUIDANCE}"
