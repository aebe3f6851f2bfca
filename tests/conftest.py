import sys
from pathlib import Path

import pytest

# Make the sensei package importable without installing
ROOT = Path(__file__).resolve().parent.parent
if ROOT.as_posix() not in sys.path:
    sys.path.insert(0, ROOT.as_posix())


@pytest.fixture
def package_dict() -> dict:
    """A complete, valid learning package in wire form."""
    return {
        "expertSummary": "  Transformers replace recurrence with attention.  ",
        "simpleExplanation": "Imagine every word can look at every other word.\nAll at once.",
        "keyContributions": ["Self-attention", "Positional encoding", "Multi-head attention"],
        "methodologyFlowchart": 'graph TD\n  A["Input Tokens"] --> B["Encoder"]\n  B --> C["Decoder"]',
        "visualDiagramDescription": "Stacked encoder and decoder blocks.",
        "videoScript": [
            {"scene": "Intro", "visual": "Title card", "narration": "Attention is all you need."},
            {"scene": "Attention", "visual": "Heatmap", "narration": "Each token scores the others."},
        ],
        "pythonCode": "import torch\nprint(torch.__version__)\n",
        "flashcards": [
            {"front": "Q, K, V", "back": "Query, key and value projections"},
            {"front": "Heads", "back": "Parallel attention subspaces"},
        ],
        "quiz": [
            {"question": "What replaces recurrence?", "options": ["Attention", "Convolution"], "correctAnswerIndex": 0},
            {"question": "How many heads in the base model?", "options": ["4", "6", "8"], "correctAnswerIndex": 2},
        ],
        "additionalInsights": "Quadratic cost in sequence length.",
    }
