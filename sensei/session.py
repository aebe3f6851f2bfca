"""Per-browser-session state: idle -> submitting -> succeeded | failed."""
import enum, logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Optional

from .errors import SenseiError
from .models import LearningPackage, QuizQuestion

logger = logging.getLogger(__name__)


class Phase(enum.Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def score_quiz(quiz: Iterable[QuizQuestion], answers: Mapping[int, int]) -> int:
    return sum(1 for i, q in enumerate(quiz) if answers.get(i) == q.correct_answer_index)


@dataclass
class SessionState:
    phase: Phase = Phase.IDLE
    result: Optional[LearningPackage] = None
    error: Optional[Exception] = None
    quiz_answers: Dict[int, int] = field(default_factory=dict)
    quiz_submitted: bool = False

    @property
    def busy(self) -> bool:
        return self.phase is Phase.SUBMITTING

    def begin(self):
        if self.busy:
            raise RuntimeError("An analysis is already running.")
        self.phase = Phase.SUBMITTING
        self.result = None
        self.error = None
        self.quiz_answers = {}
        self.quiz_submitted = False

    def succeed(self, package: LearningPackage):
        self._expect_submitting()
        self.phase, self.result = Phase.SUCCEEDED, package

    def fail(self, error: Exception):
        self._expect_submitting()
        self.phase, self.error = Phase.FAILED, error

    def reset(self):
        self.phase = Phase.IDLE
        self.result = None
        self.error = None
        self.quiz_answers = {}
        self.quiz_submitted = False

    def _expect_submitting(self):
        if not self.busy:
            raise RuntimeError(f"No analysis in flight (phase={self.phase.value}).")

    def run(self, analyze_fn, *args, **kwargs) -> Optional[LearningPackage]:
        """Run one analysis under this session. Typed failures are recorded, not raised."""
        self.begin()
        try:
            package = analyze_fn(*args, **kwargs)
        except SenseiError as exc:
            logger.warning("Analysis failed: %s", exc)
            self.fail(exc)
            return None
        except Exception as exc:
            self.fail(exc)
            raise
        self.succeed(package)
        return package

    # quiz

    def choose(self, q_index: int, o_index: int):
        if self.quiz_submitted:
            return
        self.quiz_answers[q_index] = o_index

    def all_answered(self) -> bool:
        return self.result is not None and all(i in self.quiz_answers for i in range(len(self.result.quiz)))

    def submit_quiz(self):
        if not self.all_answered():
            raise ValueError("Answer every question before submitting.")
        self.quiz_submitted = True

    def score(self) -> int:
        return score_quiz(self.result.quiz, self.quiz_answers) if self.result else 0
