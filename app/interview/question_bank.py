from __future__ import annotations

from app.interview.answer_scorer import DIFFICULTIES

DEFAULT_TOPIC = "Full Stack Development (React/Node.js)"

QUESTION_BANK: dict[str, tuple[str, ...]] = {
    "easy": (
        "What is the difference between let, const, and var in JavaScript?",
        "Explain what React Hooks are and name three commonly used hooks.",
        "What is the purpose of package.json in a Node.js project?",
        "What is the Virtual DOM in React?",
        "Explain the difference between == and === in JavaScript.",
        "What is NPM and what is it used for?",
    ),
    "medium": (
        "How would you implement user authentication in a MERN stack application?",
        "Explain the concept of middleware in Express.js with an example.",
        "What are the differences between SQL and NoSQL databases? When would you use each?",
        "How do you handle asynchronous operations in JavaScript?",
        "Explain the concept of state management in React.",
        "What is CORS and how do you handle it in Node.js?",
    ),
    "hard": (
        "Design a system to handle 10,000 concurrent WebSocket connections. What are the key considerations?",
        "How would you implement caching strategies in a high-traffic Node.js API?",
        "Describe how you would architect a microservices-based e-commerce platform.",
        "How would you optimize a React application experiencing performance issues?",
        "Explain database indexing and when you would use it.",
        "Design a scalable real-time notification system.",
    ),
}


def pick_question(difficulty: str, question_number: int) -> str:
    questions = QUESTION_BANK.get(difficulty)
    if not questions:
        raise ValueError(f"Unsupported difficulty '{difficulty}'. Expected one of: {', '.join(DIFFICULTIES)}")
    return questions[question_number % len(questions)]
