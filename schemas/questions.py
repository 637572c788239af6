# schemas/questions.py
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

# The question source speaks Spanish; accept those keys next to the English ones.
_PROMPT_KEYS = ("prompt", "pregunta", "enunciado", "text")
_OPTIONS_KEYS = ("options", "opciones", "alternativas")
_LABEL_KEYS = ("label", "texto", "text", "opcion")


def _first(raw: Dict[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        if raw.get(key) is not None:
            return raw[key]
    return None


# ---------- Upstream payload ----------


class QuestionSetIn(BaseModel):
    """Envelope returned by the question source: ``{"preguntas": [...]}``."""

    preguntas: List[Dict[str, Any]]


class Option(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    label: str


class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Union[int, str]
    prompt: str
    options: Tuple[Option, ...] = Field(min_length=1)
    # raw object exactly as received; forwarded to the tutor as context
    context: Dict[str, Any] = Field(default_factory=dict, repr=False)

    @classmethod
    def from_raw(cls, raw: Dict[str, Any], position: int) -> "Question":
        """
        Normalise one upstream question. Bare-string options get their
        position as id; a question without ``id`` gets its position.
        """
        options: Any = _first(raw, _OPTIONS_KEYS)
        if isinstance(options, list):
            normalised = []
            for pos, opt in enumerate(options):
                if isinstance(opt, str):
                    normalised.append({"id": pos, "label": opt})
                elif isinstance(opt, dict):
                    normalised.append({"id": opt.get("id", pos), "label": _first(opt, _LABEL_KEYS)})
                else:
                    normalised.append(opt)
            options = normalised

        return cls.model_validate(
            {
                "id": raw.get("id", position),
                "prompt": _first(raw, _PROMPT_KEYS),
                "options": options,
                "context": dict(raw),
            }
        )

    def option(self, option_id: Optional[int]) -> Optional[Option]:
        return next((o for o in self.options if o.id == option_id), None)


# ---------- Views ----------


class OptionOut(BaseModel):
    id: int
    label: str


class QuestionOut(BaseModel):
    id: Union[int, str]
    number: int
    prompt: str
    options: List[OptionOut]


class QuizStateOut(BaseModel):
    status: str  # loading | ready | failed
    error: Optional[str] = None
    total: int = 0
    index: Optional[int] = None
    question: Optional[QuestionOut] = None
    selected_option: Optional[int] = None
    submitted: bool = False
    is_last: bool = False
    can_submit: bool = False
    can_advance: bool = False


class SelectRequest(BaseModel):
    # null clears the selection
    option_id: Optional[int] = None
