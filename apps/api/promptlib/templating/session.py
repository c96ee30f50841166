"""Per-use variable values for one prompt template."""

from typing import Optional

from .variables import FillMode, extract_variables, render


class VariableSession:
    """
    Values typed for one template while it is open for use.

    Created with an empty string for every variable, updated as the user
    types, and dropped when the interaction ends. Nothing is persisted.
    """

    def __init__(self, template: Optional[str], title: Optional[str] = None):
        self._template = template or ""
        self.title = title
        self._variables = tuple(extract_variables(self._template))
        self.values: dict[str, str] = {name: "" for name in self._variables}

    @property
    def template(self) -> str:
        return self._template

    @property
    def variables(self) -> list[str]:
        return list(self._variables)

    def set_value(self, name: str, value: Optional[str]) -> None:
        self.values = {**self.values, name: value or ""}

    def update(self, values: dict[str, Optional[str]]) -> None:
        merged = dict(self.values)
        for name, value in values.items():
            merged[name] = value or ""
        self.values = merged

    def reset(self) -> None:
        self.values = {name: "" for name in self._variables}

    @property
    def missing(self) -> list[str]:
        """Variables still blank, in template order."""
        return [name for name in self._variables if not self.values.get(name, "").strip()]

    @property
    def preview(self) -> str:
        return render(self._template, self.values, FillMode.PREVIEW)

    def final_text(self) -> str:
        """Text to hand out on confirmation: blanks are substituted with ""."""
        return render(self._template, self.values, FillMode.FINAL)
