"""
services/explainer.py

문제 해설 생성 (시뮬레이션). 실제 AI 호출 없음.
상태가 없으며 답안/점수에 영향을 주지 않는다.
"""


def explain(question_text: str) -> str:
    return f'This is a sample explanation for the question: "{question_text}".'
