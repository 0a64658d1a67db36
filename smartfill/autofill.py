"""
smartfill.autofill

Controllers that sit between input widgets and the engine:
- SmartAutofill: debounced suggestions for one field, records the chosen value
- StrengthMeter: live password scoring
"""

from typing import Callable, Dict, List, Optional

from .debounce import DEFAULT_DELAY_MS, Debouncer
from .evaluator import evaluate, strength_color, strength_percent
from .suggestions import MIN_INPUT_LENGTH, SuggestionStore


class SmartAutofill:
    def __init__(
        self,
        field: str,
        suggestions: SuggestionStore,
        scheduler,
        on_suggestions: Optional[Callable[[List[Dict]], None]] = None,
        delay_ms: float = DEFAULT_DELAY_MS,
    ):
        self.field = field
        self.suggestions = suggestions
        self.on_suggestions = on_suggestions
        self.debouncer = Debouncer(scheduler, delay_ms)
        self.current: List[Dict] = []
        self.visible = False

    def _publish(self, items: List[Dict]) -> None:
        self.current = items
        self.visible = bool(items)
        if self.on_suggestions:
            self.on_suggestions(items)

    def _evaluate(self, text: str) -> None:
        self._publish(self.suggestions.get_suggestions(self.field, text))

    def on_input(self, text: str) -> None:
        if len(text) < MIN_INPUT_LENGTH:
            self.debouncer.cancel()
            self._publish([])
            return
        self.debouncer.submit(self._evaluate, text)

    def choose(self, value: str) -> str:
        """Record the chosen suggestion and close the list."""
        self.debouncer.cancel()
        self.suggestions.accept_suggestion(self.field, value)
        self.current = []
        self.visible = False
        return value


class StrengthMeter:
    def __init__(self, on_change: Optional[Callable[[Dict], None]] = None):
        self.on_change = on_change
        self.result: Dict = evaluate("")

    def update(self, password: str) -> Dict:
        self.result = evaluate(password)
        if password and self.on_change:
            self.on_change(self.result)
        return self.result

    @property
    def color(self) -> str:
        return strength_color(self.result["score"])

    @property
    def percent(self) -> int:
        return strength_percent(self.result["score"])
