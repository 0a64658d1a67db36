"""CLI for SmartFill: score, suggest, accept, history, simulate."""

import argparse
import logging
from rich import print
from rich.panel import Panel
from rich.table import Table

from .autofill import SmartAutofill
from .config import load_config
from .debounce import ManualScheduler
from .evaluator import evaluate, strength_color, strength_percent
from .storage import JsonFileStore
from .suggestions import MIN_INPUT_LENGTH, SuggestionStore


def _suggestion_store(args) -> SuggestionStore:
    cfg = load_config()
    path = args.file or cfg.get("store_path")
    return SuggestionStore(JsonFileStore(path), namespace=cfg.get("namespace") or "smartfill")

def _print_suggestions(items):
    if not items:
        print("[yellow]No suggestions.[/yellow]")
        return
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Suggestion")
    table.add_column("Confidence", justify="right")
    for s in items:
        table.add_row(s["value"], f"{round(s['confidence'] * 100)}%")
    print(table)

def cmd_score(args):
    result = evaluate(args.password)
    color = strength_color(result["score"])
    header = f"Score: {result['score']} / 5 — {result['label'] or 'N/A'}"
    body = f"[{color}]{'█' * result['score']}{'░' * (5 - result['score'])}[/{color}] {strength_percent(result['score'])}%"
    print(Panel(body, title=header))
    if result["feedback"]:
        print("[bold]Suggestions:[/bold]")
        for f in result["feedback"]:
            print(f" • {f}")

def cmd_suggest(args):
    store = _suggestion_store(args)
    _print_suggestions(store.get_suggestions(args.field, args.input))

def cmd_accept(args):
    store = _suggestion_store(args)
    if not args.value:
        print("[red]Refusing to store an empty value.[/red]")
        return
    store.accept_suggestion(args.field, args.value)
    print(f"[green]Saved '{args.value}' for field {args.field}.[/green]")

def cmd_history(args):
    store = _suggestion_store(args)
    entries = store.history(args.field)
    if not entries:
        print(f"[yellow]No history for field {args.field}.[/yellow]")
        return
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", width=4)
    table.add_column("Value")
    for i, v in enumerate(entries):
        table.add_row(str(i), v)
    print(table)

def cmd_simulate(args):
    """Type TEXT one character every --interval ms and show which evaluations actually ran."""
    store = _suggestion_store(args)
    scheduler = ManualScheduler()
    cfg = load_config()
    delay = args.delay if args.delay is not None else cfg.get("debounce_ms", 150)
    typed = {"text": ""}

    def show(items):
        if len(typed['text']) < MIN_INPUT_LENGTH:
            print(f"[dim]t={scheduler.now:.0f}ms[/dim] cleared")
            return
        print(f"[bold]t={scheduler.now:.0f}ms[/bold] evaluated '{typed['text']}'")
        _print_suggestions(items)

    try:
        widget = SmartAutofill(args.field, store, scheduler, on_suggestions=show, delay_ms=delay)
    except ValueError as e:
        print(f"[red]Invalid debounce window {delay!r}: {e}[/red]")
        return
    for ch in args.text:
        typed["text"] += ch
        widget.on_input(typed["text"])
        scheduler.advance(args.interval)
    scheduler.advance(delay)

def main(argv=None):
    parser = argparse.ArgumentParser(prog="smartfill")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sc = sub.add_parser("score", help="Score a password and show feedback")
    sc.add_argument("password", type=str, help="Password to evaluate (wrap in quotes)")
    sc.set_defaults(func=cmd_score)

    sg = sub.add_parser("suggest", help="Show suggestions for a field and partial input")
    sg.add_argument("--file", "-f", type=str, help="Path to history file")
    sg.add_argument("field", type=str, help="Field name (e.g., email)")
    sg.add_argument("input", type=str, help="Current input")
    sg.set_defaults(func=cmd_suggest)

    ac = sub.add_parser("accept", help="Record an accepted value for a field")
    ac.add_argument("--file", "-f", type=str, help="Path to history file")
    ac.add_argument("field", type=str, help="Field name")
    ac.add_argument("value", type=str, help="Accepted value")
    ac.set_defaults(func=cmd_accept)

    hi = sub.add_parser("history", help="List stored history for a field")
    hi.add_argument("--file", "-f", type=str, help="Path to history file")
    hi.add_argument("field", type=str, help="Field name")
    hi.set_defaults(func=cmd_history)

    sm = sub.add_parser("simulate", help="Simulate typing into a field with debounced suggestions")
    sm.add_argument("--file", "-f", type=str, help="Path to history file")
    sm.add_argument("--interval", type=int, default=50, help="Milliseconds between keystrokes")
    sm.add_argument("--delay", type=int, help="Debounce window in ms (default from config)")
    sm.add_argument("field", type=str, help="Field name")
    sm.add_argument("text", type=str, help="Text to type")
    sm.set_defaults(func=cmd_simulate)

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    args.func(args)

if __name__ == "__main__":
    main()
