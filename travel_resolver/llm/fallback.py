"""
Generative Fallback Engine

Synthesizes schema-shaped travel data with a chat model when the live
provider cannot answer. The model is shown the JSON Schema of the expected
output, its reply is parsed and validated with pydantic, and a reply that
does not validate is sent back once with the validation errors before the
engine gives up with ``SchemaValidationFailed``.
"""

import json
from typing import Any, List, Literal, Optional, Type, Union

from langchain_core.exceptions import OutputParserException
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, HumanMessage
from langchain_core.output_parsers import JsonOutputParser
from langchain_core.prompts import ChatPromptTemplate
from langchain_openai import ChatOpenAI
from pydantic import AfterValidator, BaseModel, Field, TypeAdapter, ValidationError
from typing_extensions import Annotated

from travel_resolver.config import Settings
from travel_resolver.errors import SchemaValidationFailed
from travel_resolver.obs.logger import log_event
from travel_resolver.utils.dates import today_iso

Cardinality = Literal["object", "array"]

SYSTEM = """You generate realistic travel data for a flight booking assistant whose live data source is unavailable.
Reply with JSON ONLY: no prose, no markdown, no code fences.
{shape}
The JSON must validate against this JSON Schema:
{schema}
Use real airports, real carriers and plausible times and prices.
Timestamps are ISO 8601 (YYYY-MM-DDTHH:MM:SS). Today's date for reference: {today}
"""

USER = """{prompt}"""

REPAIR = """Your previous reply was rejected:
{errors}
Reply again with the complete, corrected JSON only."""

_OBJECT_SHAPE = "Reply with a single JSON object."
_ARRAY_SHAPE = "Reply with a JSON array of objects{bounds}."


def _array_bounds(min_items: Optional[int], max_items: Optional[int]) -> str:
    if min_items is not None and min_items == max_items:
        return f" containing exactly {min_items} items"
    parts = []
    if min_items is not None:
        parts.append(f"at least {min_items}")
    if max_items is not None:
        parts.append(f"at most {max_items}")
    return f" containing {' and '.join(parts)} items" if parts else ""


def _distinct(field: str, label: str):
    def check(items: list) -> list:
        seen = set()
        for item in items:
            key = getattr(item, field)
            if key in seen:
                raise ValueError(f"duplicate {label}: {key!r}")
            seen.add(key)
        return items
    return check


def _content_text(content: Union[str, List[Any]]) -> str:
    if isinstance(content, str):
        return content
    # content blocks, e.g. [{"type": "text", "text": "..."}]
    return "".join(
        block.get("text", "") if isinstance(block, dict) else str(block)
        for block in content
    )


class GenerativeFallbackEngine:
    def __init__(self, llm: BaseChatModel, max_attempts: int = 2, tz: str = "UTC"):
        self.llm = llm
        self.max_attempts = max(1, max_attempts)
        self.tz = tz
        self.parser = JsonOutputParser()

    async def generate(self, prompt: str, schema: Type[BaseModel],
                       cardinality: Cardinality = "object",
                       min_items: Optional[int] = None,
                       max_items: Optional[int] = None,
                       unique_by: Optional[str] = None):
        """Return a ``schema`` instance, or a list of them for ``cardinality="array"``.

        ``unique_by`` names a field that must differ between array items.
        """
        if cardinality == "array":
            constraints = [Field(min_length=min_items, max_length=max_items)]
            shape = _ARRAY_SHAPE.format(bounds=_array_bounds(min_items, max_items))
            if unique_by:
                label = schema.model_fields[unique_by].alias or unique_by
                constraints.append(AfterValidator(_distinct(unique_by, label)))
                shape += f" No two items may share the same {label}."
            target = TypeAdapter(Annotated[(List[schema], *constraints)])
        elif cardinality == "object":
            target = TypeAdapter(schema)
            shape = _OBJECT_SHAPE
        else:
            raise ValueError(f"unknown cardinality: {cardinality!r}")

        template = ChatPromptTemplate.from_messages([("system", SYSTEM), ("user", USER)])
        messages = template.format_messages(
            shape=shape,
            schema=json.dumps(target.json_schema(by_alias=True)),
            today=today_iso(self.tz),
            prompt=prompt,
        )

        last_error = "no attempt made"
        for attempt in range(1, self.max_attempts + 1):
            res = await self.llm.ainvoke(messages)
            raw = _content_text(res.content)
            try:
                data = self._coerce(self.parser.parse(raw), cardinality, max_items)
                return target.validate_python(data)
            except (OutputParserException, ValidationError) as e:
                last_error = str(e)
                log_event(
                    "fallback_output_rejected",
                    level="WARNING",
                    schema=schema.__name__,
                    cardinality=cardinality,
                    attempt=attempt,
                    error=last_error[:500],
                )
                messages = messages + [
                    AIMessage(content=raw),
                    HumanMessage(content=REPAIR.format(errors=last_error)),
                ]

        raise SchemaValidationFailed(schema.__name__, last_error)

    @staticmethod
    def _coerce(data: Any, cardinality: Cardinality, max_items: Optional[int]) -> Any:
        """Schema enforcement before validation: unwrap single-key wrappers and cap arrays."""
        if cardinality == "array":
            if isinstance(data, dict):
                lists = [v for v in data.values() if isinstance(v, list)]
                if len(lists) == 1:
                    data = lists[0]
            if isinstance(data, list) and max_items is not None:
                data = data[:max_items]
        elif isinstance(data, list) and len(data) == 1:
            data = data[0]
        return data


def build_fallback_llm(settings: Settings) -> ChatOpenAI:
    kwargs = {"model": settings.OPENAI_MODEL, "temperature": settings.FALLBACK_TEMPERATURE}
    if settings.OPENAI_API_KEY:
        kwargs["api_key"] = settings.OPENAI_API_KEY
    return ChatOpenAI(**kwargs)


def build_fallback_engine(settings: Settings, llm: Optional[BaseChatModel] = None) -> GenerativeFallbackEngine:
    return GenerativeFallbackEngine(
        llm or build_fallback_llm(settings),
        max_attempts=settings.FALLBACK_MAX_ATTEMPTS,
        tz=settings.TZ,
    )
