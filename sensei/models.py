"""Learning package returned by one analysis call.

Built wholesale from the decoded JSON reply and never mutated afterwards.
Validation is strict: anything that does not match the shape raises
``FormatError`` instead of being coerced.
"""
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple

from .errors import FormatError


def _require(data: Mapping, key: str, where: str) -> Any:
    if not isinstance(data, Mapping):
        raise FormatError(f"{where} must be an object")
    if key not in data:
        raise FormatError(f"{where} is missing '{key}'")
    return data[key]


def _text(data: Mapping, key: str, where: str, non_empty: bool = False) -> str:
    value = _require(data, key, where)
    if not isinstance(value, str):
        raise FormatError(f"{where}.{key} must be a string")
    if non_empty and not value.strip():
        raise FormatError(f"{where}.{key} must not be empty")
    return value


def _items(data: Mapping, key: str, where: str) -> list:
    value = _require(data, key, where)
    if not isinstance(value, list):
        raise FormatError(f"{where}.{key} must be an array")
    return value


@dataclass(frozen=True)
class VideoScene:
    scene: str
    visual: str
    narration: str

    @classmethod
    def from_dict(cls, data: Mapping, where: str = "videoScene") -> "VideoScene":
        return cls(
            scene=_text(data, "scene", where),
            visual=_text(data, "visual", where),
            narration=_text(data, "narration", where),
        )


@dataclass(frozen=True)
class Flashcard:
    front: str
    back: str

    @classmethod
    def from_dict(cls, data: Mapping, where: str = "flashcard") -> "Flashcard":
        return cls(front=_text(data, "front", where), back=_text(data, "back", where))


@dataclass(frozen=True)
class QuizQuestion:
    question: str
    options: Tuple[str, ...]
    correct_answer_index: int

    @classmethod
    def from_dict(cls, data: Mapping, where: str = "quiz") -> "QuizQuestion":
        question = _text(data, "question", where)
        options = _items(data, "options", where)
        if len(options) < 2:
            raise FormatError(f"{where}.options needs at least two entries")
        if not all(isinstance(o, str) for o in options):
            raise FormatError(f"{where}.options must contain strings")
        index = _require(data, "correctAnswerIndex", where)
        # bool is an int subclass; reject it explicitly
        if isinstance(index, bool) or not isinstance(index, int):
            raise FormatError(f"{where}.correctAnswerIndex must be an integer")
        if not 0 <= index < len(options):
            raise FormatError(
                f"{where}.correctAnswerIndex {index} out of range for {len(options)} options"
            )
        return cls(question=question, options=tuple(options), correct_answer_index=index)


@dataclass(frozen=True)
class LearningPackage:
    expert_summary: str
    simple_explanation: str
    key_contributions: Tuple[str, ...]
    methodology_flowchart: str
    visual_diagram_description: str
    video_script: Tuple[VideoScene, ...]
    python_code: str
    flashcards: Tuple[Flashcard, ...]
    quiz: Tuple[QuizQuestion, ...]
    additional_insights: str

    @classmethod
    def from_dict(cls, data: Mapping) -> "LearningPackage":
        where = "response"
        if not isinstance(data, Mapping):
            raise FormatError("response must be a JSON object")
        contributions = _items(data, "keyContributions", where)
        if not all(isinstance(c, str) for c in contributions):
            raise FormatError("response.keyContributions must contain strings")
        return cls(
            expert_summary=_text(data, "expertSummary", where, non_empty=True),
            simple_explanation=_text(data, "simpleExplanation", where, non_empty=True),
            key_contributions=tuple(contributions),
            methodology_flowchart=_text(data, "methodologyFlowchart", where),
            visual_diagram_description=_text(data, "visualDiagramDescription", where),
            video_script=tuple(
                VideoScene.from_dict(s, f"videoScript[{i}]")
                for i, s in enumerate(_items(data, "videoScript", where))
            ),
            python_code=_text(data, "pythonCode", where),
            flashcards=tuple(
                Flashcard.from_dict(c, f"flashcards[{i}]")
                for i, c in enumerate(_items(data, "flashcards", where))
            ),
            quiz=tuple(
                QuizQuestion.from_dict(q, f"quiz[{i}]")
                for i, q in enumerate(_items(data, "quiz", where))
            ),
            additional_insights=_text(data, "additionalInsights", where),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "expertSummary": self.expert_summary,
            "simpleExplanation": self.simple_explanation,
            "keyContributions": list(self.key_contributions),
            "methodologyFlowchart": self.methodology_flowchart,
            "visualDiagramDescription": self.visual_diagram_description,
            "videoScript": [
                {"scene": s.scene, "visual": s.visual, "narration": s.narration}
                for s in self.video_script
            ],
            "pythonCode": self.python_code,
            "flashcards": [{"front": c.front, "back": c.back} for c in self.flashcards],
            "quiz": [
                {
                    "question": q.question,
                    "options": list(q.options),
                    "correctAnswerIndex": q.correct_answer_index,
                }
                for q in self.quiz
            ],
            "additionalInsights": self.additional_insights,
        }
