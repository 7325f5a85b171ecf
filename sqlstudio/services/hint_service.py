"""
Gemini hint provider for the SQL editor.
Uses the google-genai client with either a Gemini API key or Vertex AI.
The client is built lazily, so an unconfigured deployment never touches the network.
"""
import json
import logging
import re
from pathlib import Path

from sqlstudio.config import Settings
from sqlstudio.services.ai_security import filter_secrets_from_dict, filter_secrets_from_text

logger = logging.getLogger(__name__)

HINTS_DISABLED_MESSAGE = (
    "AI assistance is currently disabled in this environment. "
    "Please allow time for the administrator to configure the API key."
)
HINTS_UNAVAILABLE_MESSAGE = "Hints are unavailable right now: the AI tutor could not be reached. Please try again later."

MAX_HINT_SENTENCES = 3

HINT_SYSTEM_INSTRUCTION = """You are a friendly SQL tutor on a learning platform.
A student is working on an assignment and asks for a hint about their current query.

Rules:
- Reply with at most 3 short sentences.
- Point at the next concept or clause to look at (e.g. WHERE, JOIN condition, ORDER BY).
- Never write the complete solution query, and never give more than a small fragment of SQL.
- If the query is already correct, say so and suggest what to double-check.
- Be encouraging and concise."""


class HintProviderUnavailable(Exception):
    """The hint provider is not configured or failed to answer."""


def is_configured(settings: Settings) -> bool:
    return bool(settings.gemini_api_key.strip() or settings.vertex_project_id.strip())


def _build_client(settings: Settings):
    from google import genai

    if settings.gemini_api_key:
        return genai.Client(api_key=settings.gemini_api_key)

    credentials = None
    if settings.vertex_credentials_path:
        from google.oauth2 import service_account

        path = Path(settings.vertex_credentials_path)
        if path.is_file():
            credentials = service_account.Credentials.from_service_account_file(
                str(path),
                scopes=["https://www.googleapis.com/auth/cloud-platform"],
            )
    return genai.Client(
        vertexai=True,
        project=settings.vertex_project_id,
        location=settings.vertex_location,
        credentials=credentials,
    )


def _describe_schemas(schemas: list[dict]) -> str:
    lines = []
    for schema in schemas:
        columns = ", ".join(f"{c.get('name')} {c.get('type')}" for c in schema.get("columns", []))
        lines.append(f"- {schema.get('tableName')}({columns})")
    return "\n".join(lines)


def build_hint_prompt(context: dict, current_query: str) -> str:
    """
    context: {"title", "description", "requirements": [...], "schemas": [{tableName, columns, sampleData}]}
    Sample rows are left out; context and query are redacted for credentials.
    """
    context = filter_secrets_from_dict(context)
    parts = [f"## Assignment: {context.get('title', '')}\n"]
    if context.get("description"):
        parts.append(f"{context['description']}\n")
    requirements = context.get("requirements") or []
    if requirements:
        parts.append("\n## Requirements\n")
        parts.extend(f"- {r}\n" for r in requirements)
    schemas = context.get("schemas") or []
    if schemas:
        parts.append("\n## Tables\n")
        parts.append(_describe_schemas(schemas))
        parts.append("\n")
    parts.append("\n## Student's current query\n```sql\n")
    parts.append(filter_secrets_from_text(current_query) or "-- (empty)")
    parts.append("\n```\n\nGive one short hint.")
    return "".join(parts)


_SENTENCE_END = re.compile(r"(?<=[.!?])\s+")


def limit_sentences(text: str, max_sentences: int = MAX_HINT_SENTENCES) -> str:
    sentences = [s for s in _SENTENCE_END.split(text.strip()) if s]
    return " ".join(sentences[:max_sentences])


class HintProvider:
    """
    Gemini hint client bound to one app's Settings. Lives on app.state for the process lifetime.
    The google-genai client is only built on the first hint of a configured deployment.
    """

    def __init__(self, settings: Settings):
        self._settings = settings
        self._client = None

    @property
    def configured(self) -> bool:
        return is_configured(self._settings)

    def _get_client(self):
        if self._client is None:
            if not self.configured:
                raise HintProviderUnavailable("Hint provider is not configured")
            self._client = _build_client(self._settings)
        return self._client

    def generate_hint(self, context: dict, current_query: str) -> str:
        """
        Call Gemini for a tutoring hint. Blocking.
        Raises HintProviderUnavailable when unconfigured or on any provider error.
        """
        prompt = build_hint_prompt(context, current_query)
        try:
            client = self._get_client()
            from google.genai.types import GenerateContentConfig

            response = client.models.generate_content(
                model=self._settings.gemini_model,
                contents=prompt,
                config=GenerateContentConfig(
                    system_instruction=HINT_SYSTEM_INSTRUCTION,
                    temperature=0.4,
                    max_output_tokens=256,
                ),
            )
        except HintProviderUnavailable:
            raise
        except Exception as e:
            raise HintProviderUnavailable(str(e)) from e

        text = getattr(response, "text", None) if response else None
        if not text:
            raise HintProviderUnavailable("Empty response from model")
        return limit_sentences(text)


def hint_cache_key(context: dict, current_query: str) -> str:
    """Stable input for the hint cache key."""
    return json.dumps({"context": context, "query": current_query.strip()}, sort_keys=True, default=str)
