import json, logging
from typing import Optional

from . import llm
from .errors import ConfigurationError, FormatError, MissingInput, ServiceError
from .ingest import FileData, decode
from .models import LearningPackage

logger = logging.getLogger(__name__)

SYS_ANALYSIS = (
    "You are an expert academic researcher and educator. When generating Mermaid diagrams, "
    'you MUST wrap all node labels in double quotes to prevent syntax errors: NodeA["Description"].'
)

FLOWCHART_RULES = """Generate VALID Mermaid.js 'graph TD' syntax showing the methodology.
   - Use strictly alphanumeric node IDs (e.g., NodeA, NodeB) with NO spaces or special characters.
   - Wrap ALL node labels in double quotes inside the square brackets.
   - Example: NodeA["Input Data (Raw)"] --> NodeB["Processing Step"]"""

_STR = {"type": "string"}

ANALYSIS_SCHEMA = {
    "type": "object",
    "properties": {
        "expertSummary": {"type": "string", "description": "High-level summary for experts"},
        "simpleExplanation": {"type": "string", "description": "Beginner-friendly explanation using analogies"},
        "keyContributions": {"type": "array", "items": _STR, "description": "List of key contributions"},
        "methodologyFlowchart": {
            "type": "string",
            "description": 'Mermaid.js graph TD syntax. Use simple alphanumeric IDs and wrap ALL labels '
                           'in double quotes, e.g. A["Input Data"] --> B["Process (Layer 1)"]',
        },
        "visualDiagramDescription": {"type": "string", "description": "Text description of architecture/pipelines"},
        "videoScript": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "scene": _STR,
                    "visual": {"type": "string", "description": "Visual direction for the scene"},
                    "narration": {"type": "string", "description": "Spoken text"},
                },
                "required": ["scene", "visual", "narration"],
            },
        },
        "pythonCode": {"type": "string", "description": "Reproducible Python code snippet"},
        "flashcards": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {"front": _STR, "back": _STR},
                "required": ["front", "back"],
            },
        },
        "quiz": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "question": _STR,
                    "options": {"type": "array", "items": _STR},
                    "correctAnswerIndex": {"type": "integer", "description": "0-based index into options"},
                },
                "required": ["question", "options", "correctAnswerIndex"],
            },
        },
        "additionalInsights": {"type": "string", "description": "Future scope or limitations"},
    },
    "required": [
        "expertSummary",
        "simpleExplanation",
        "keyContributions",
        "methodologyFlowchart",
        "visualDiagramDescription",
        "videoScript",
        "pythonCode",
        "flashcards",
        "quiz",
        "additionalInsights",
    ],
}


def build_prompt(text: str = "") -> str:
    extra = f"Additional user context/text:\n{text}\n" if text and text.strip() else ""
    return f"""You are ResearchSensei, an AI that turns research papers into complete learning modules.
{extra}
Analyze the provided content (paper, image or text) and return the result strictly as JSON matching the response schema:
1) expertSummary: high-level academic summary.
2) simpleExplanation: explain it like I'm 15, with analogies.
3) keyContributions: bullet points.
4) methodologyFlowchart: {FLOWCHART_RULES}
5) visualDiagramDescription: describe any other diagrams needed.
6) videoScript: a YouTube-style script, one entry per scene with visual cues and narration.
7) pythonCode: code demonstrating the core concept or algorithm.
8) flashcards: 10 key concepts as front/back pairs.
9) quiz: 5 multiple choice questions; correctAnswerIndex is the 0-based index of the right option.
10) additionalInsights: future scope and limitations.
Respond ONLY in JSON."""


def build_parts(file_data: Optional[FileData], text: str = "") -> list:
    parts = []
    if file_data is not None:
        parts.append({"mime_type": file_data.mime_type, "data": decode(file_data)})
    parts.append(build_prompt(text))
    return parts


def parse_response(raw: Optional[str]) -> LearningPackage:
    if raw is None or not raw.strip():
        raise ServiceError("Empty response from Gemini.")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise FormatError(f"Response is not valid JSON: {exc}") from exc
    return LearningPackage.from_dict(data)


def analyze(file_data: Optional[FileData] = None, text: str = "", *, model_name: str = None) -> LearningPackage:
    """Run one analysis. No retries; the caller decides what to do on failure."""
    text = text or ""
    if file_data is None and not text.strip():
        raise MissingInput("Upload a file or paste some text first.")
    parts = build_parts(file_data, text)
    logger.info(
        "Analyzing %s (%d text chars)",
        file_data.name if file_data else "pasted text",
        len(text),
    )
    try:
        raw = llm.generate_json(parts, ANALYSIS_SCHEMA, system=SYS_ANALYSIS, model_name=model_name)
    except ConfigurationError:
        raise
    except Exception as exc:
        logger.exception("Gemini analysis failed")
        raise ServiceError(f"Failed to process the input: {exc}") from exc
    return parse_response(raw)
