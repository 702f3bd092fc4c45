from __future__ import annotations

from typing import Sequence

from app.schemas.interview import ScoredAnswer

EXTRACT_CONTACT_PROMPT = """Extract the following details from this resume text. Return ONLY a JSON object with no additional text:

Resume Text:
{resume_text}

Return format:
{{
  "name": "Full Name or null",
  "email": "email@example.com or null",
  "phone": "phone number or null"
}}"""

GENERATE_QUESTION_PROMPT = """Generate 1 {difficulty} level interview question for {topic}.
Question should be practical and test real-world knowledge.
Return ONLY the question text, no numbering or extra formatting."""

EVALUATE_ANSWER_PROMPT = """Evaluate this interview answer on a scale of 0-10.

Question ({difficulty} level): {question}
Answer: {answer}

Consider:
- Correctness and accuracy
- Depth of understanding
- Practical knowledge
- Communication clarity

Return ONLY a number between 0-10, nothing else."""

SUMMARY_PROMPT = """Create a brief 2-3 sentence professional summary for candidate {name}.

Average Score: {average:.1f}/10
Questions answered: {count}

Performance breakdown:
{breakdown}

Write a concise professional assessment."""


def build_extract_contact_prompt(resume_text: str) -> str:
    return EXTRACT_CONTACT_PROMPT.format(resume_text=resume_text)


def build_question_prompt(difficulty: str, topic: str) -> str:
    return GENERATE_QUESTION_PROMPT.format(difficulty=difficulty, topic=topic)


def build_evaluate_prompt(question: str, answer: str, difficulty: str) -> str:
    return EVALUATE_ANSWER_PROMPT.format(question=question, answer=answer, difficulty=difficulty)


def build_summary_prompt(name: str, answers: Sequence[ScoredAnswer]) -> str:
    average = sum(a.score for a in answers) / len(answers)
    breakdown = "\n".join(
        f"Q{index} ({answer.difficulty}): {answer.score}/10" for index, answer in enumerate(answers, start=1)
    )
    return SUMMARY_PROMPT.format(name=name, average=average, count=len(answers), breakdown=breakdown)
