from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.interview import DIFFICULTIES, compose_summary, score_answer  # noqa: E402
from app.schemas.interview import ScoredAnswer  # noqa: E402


def score_transcript(transcript: dict) -> dict:
    answers = transcript.get("answers") or []
    scored: list[ScoredAnswer] = []
    for index, item in enumerate(answers, start=1):
        difficulty = str(item.get("difficulty", "")).strip().lower()
        if difficulty not in DIFFICULTIES:
            raise ValueError(f"Answer {index}: difficulty must be one of {', '.join(DIFFICULTIES)}")
        answer_text = str(item.get("answer") or "")
        scored.append(
            ScoredAnswer(
                difficulty=difficulty,
                score=score_answer(answer_text, difficulty),
                question=item.get("question"),
                answer=answer_text,
            )
        )

    result = compose_summary(transcript.get("name"), scored)
    return {
        "scores": [{"question": a.question, "difficulty": a.difficulty, "score": a.score} for a in scored],
        "summary": result.summary_text,
        "averageScore": result.average_score_percent,
        "totalQuestions": result.total_questions,
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Score an interview transcript with the offline heuristics.")
    parser.add_argument("transcript", help="Path to a JSON file with 'name' and 'answers'.")
    parser.add_argument("--out", default="", help="Optional path for the JSON report (stdout otherwise).")
    args = parser.parse_args()

    transcript = json.loads(Path(args.transcript).read_text(encoding="utf-8"))
    report = json.dumps(score_transcript(transcript), indent=2, ensure_ascii=False)

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(report + "\n", encoding="utf-8")
    else:
        print(report)


if __name__ == "__main__":
    main()
