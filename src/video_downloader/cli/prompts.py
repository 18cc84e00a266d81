"""Thin wrappers around questionary prompts.

Every helper converts questionary's ``None`` (Esc / Ctrl+C) into
:class:`~video_downloader.exceptions.PromptCancelled`, so callers only
deal with real answers.  Choices are ``(label, value)`` pairs.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Any

from video_downloader.exceptions import DependencyError, PromptCancelled
from video_downloader.i18n import t


def _import_questionary() -> Any:
    """Import questionary lazily for interactive selection."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise DependencyError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def _answer(result: Any) -> Any:
    if result is None:
        raise PromptCancelled(t("common.cancelled"))
    return result


def ask_select(
    message: str,
    choices: Sequence[tuple[str, Any]],
    *,
    default: Any = None,
) -> Any:
    """Single choice with arrow keys; returns the chosen value."""
    questionary = _import_questionary()
    items = [questionary.Choice(title=label, value=value) for label, value in choices]
    values = [value for _, value in choices]
    return _answer(
        questionary.select(
            message,
            choices=items,
            default=default if default in values else None,
            use_arrow_keys=True,
            use_shortcuts=False,
        ).ask()
    )


def ask_yes_no(message: str, *, default: bool = True) -> bool:
    """Localised yes/no as a two-item select."""
    return bool(
        ask_select(
            message,
            [(t("common.yes"), True), (t("common.no"), False)],
            default=default,
        )
    )


def ask_text(
    message: str,
    *,
    default: str = "",
    validate: Callable[[str], bool | str] | None = None,
) -> str:
    questionary = _import_questionary()
    kwargs: dict[str, Any] = {"default": default}
    if validate is not None:
        kwargs["validate"] = validate
    return str(_answer(questionary.text(message, **kwargs).ask()))


def ask_checkbox(
    message: str,
    choices: Sequence[tuple[str, Any]],
    *,
    checked: Iterable[Any] = (),
) -> list[Any]:
    """Multi-select requiring at least one ticked entry."""
    questionary = _import_questionary()
    preselected = set(checked)
    items = [
        questionary.Choice(title=label, value=value, checked=value in preselected)
        for label, value in choices
    ]
    result = _answer(
        questionary.checkbox(
            message,
            choices=items,
            validate=lambda picked: bool(picked) or t("common.required"),
        ).ask()
    )
    if not result:
        raise PromptCancelled(t("common.required"))
    return list(result)


def not_blank(value: str) -> bool | str:
    """questionary validator rejecting empty input."""
    return bool(value.strip()) or t("common.empty")
