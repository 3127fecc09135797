"""
data/sample_quizzes.py — 내장 샘플 퀴즈 (원본 포맷 그대로)
"""

SAMPLE_QUIZZES = {
    "history-gk": {
        "quiz_id": "history-gk",
        "title": "History GK Test",
        "description": "History GK Test created by a@gmail.com",
        "time_limit": 300,
        "questions": [
            {
                "question_id": "56",
                "question_text": "When was the 'Battle of Tukaroi' fought?",
                "type": "multiple-choice",
                "correct_answer": "1575",
                "options": [
                    {"option_text": "1532", "is_correct": False},
                    {"option_text": "232", "is_correct": False},
                    {"option_text": "1575", "is_correct": True},
                    {"option_text": "1579", "is_correct": False},
                ],
            },
            {
                "question_id": "58",
                "question_text": "Lion is king of the jungle",
                "type": "true-false",
                "correct_answer": "True",
                "options": [
                    {"option_text": "", "is_correct": False},
                    {"option_text": "", "is_correct": False},
                    {"option_text": "", "is_correct": False},
                    {"option_text": "", "is_correct": False},
                ],
            },
            {
                "question_id": "59",
                "question_text": "There _____ a cat",
                "type": "fill-in-the-blank",
                "correct_answer": "was",
                "options": [
                    {"option_text": "", "is_correct": False},
                    {"option_text": "", "is_correct": False},
                    {"option_text": "", "is_correct": False},
                    {"option_text": "", "is_correct": False},
                ],
            },
            {
                "question_id": "57",
                "question_text": "Which of the movies released in 2022?",
                "type": "multiple-select",
                "correct_answer": "",
                "options": [
                    {"option_text": "ff", "is_correct": True},
                    {"option_text": "ss", "is_correct": False},
                    {"option_text": "ee", "is_correct": False},
                    {"option_text": "ww", "is_correct": True},
                ],
            },
        ],
    },
}
