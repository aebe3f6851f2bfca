import os, logging
import google.generativeai as genai
from dotenv import load_dotenv

from .errors import ConfigurationError

load_dotenv(override=True)
logger = logging.getLogger(__name__)

MODEL_NAME = os.getenv("MODEL_NAME", "gemini-2.5-flash")


def get_api_key() -> str:
    key = (os.getenv("GEMINI_API_KEY") or "").strip()
    if not key:
        raise ConfigurationError("Gemini API key missing. Set GEMINI_API_KEY in the environment or .env.")
    return key


def generate_json(parts, schema, system: str = None, model_name: str = None) -> str:
    """One structured-output call. Returns the raw reply text (may be empty)."""
    genai.configure(api_key=get_api_key())
    name = model_name or MODEL_NAME
    logger.debug("genai version=%s model=%s", getattr(genai, "__version__", "unknown"), name)
    model = genai.GenerativeModel(
        name,
        system_instruction=system or None,
        generation_config=genai.GenerationConfig(
            response_mime_type="application/json",
            response_schema=schema,
        ),
    )
    resp = model.generate_content(parts)
    return resp.text
