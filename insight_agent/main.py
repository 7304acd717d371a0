"""Command-line entry point for the insight agent.

Load a dataset from a local file (``--data``) or run the placeholder web
extraction (``--url``), print its overview and statistics, then start an
interactive question loop.

Example:

    insight-agent --data ~/Downloads/sales.csv --chart bar

Environment variables:

    INSIGHT_DATA_PATH       Default for --data.
    INSIGHT_DATA_URL        Default for --url.
    INSIGHT_RESPONSE_DELAY  Seconds before each answer (default 2).
    INSIGHT_SCRAPE_DELAY    Seconds before the placeholder scrape returns (default 2).
    INSIGHT_LOG_LEVEL       Logging level (default WARNING).
"""

import argparse
import json
import logging
import mimetypes
import os
import sys
from typing import List, Optional, Tuple

from insight_agent import AppState, ChatAgent, DataHandler, Settings
from insight_agent.agent import SUGGESTED_QUERIES
from insight_agent.charts import CHART_KINDS, project


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Start the insight agent interactive CLI")
    parser.add_argument(
        "--data",
        type=str,
        default=os.getenv("INSIGHT_DATA_PATH"),
        help="Path to a CSV, JSON, Excel or HTML file. If omitted, INSIGHT_DATA_PATH env var is used.",
    )
    parser.add_argument(
        "--url",
        type=str,
        default=os.getenv("INSIGHT_DATA_URL"),
        help="URL for the placeholder web extraction, used when --data is not given.",
    )
    parser.add_argument(
        "--chart",
        choices=CHART_KINDS,
        default=None,
        help="Print the chart projection of this kind after loading.",
    )
    parser.add_argument(
        "--no-delay",
        action="store_true",
        help="Answer questions and scrapes immediately instead of simulating latency.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser.parse_args(argv)


def _load(state: AppState, args: argparse.Namespace) -> bool:
    """Load the dataset named on the command line into ``state``."""
    import asyncio

    if args.data:
        try:
            with open(args.data, "rb") as f:
                content = f.read()
        except OSError as e:
            print(f"Failed to read dataset: {e}")
            return False
        ctype = mimetypes.guess_type(args.data)[0] or ""
        dataset, note = state.upload_file(os.path.basename(args.data), content, ctype, len(content))
    elif args.url is not None:
        print("Extracting data...")
        dataset, note = asyncio.run(state.scrape_url(args.url))
    else:
        print("Provide --data or --url (or INSIGHT_DATA_PATH / INSIGHT_DATA_URL).")
        return False
    print(f"{note.title} {note.description}")
    return dataset is not None


def _print_stats(handler: DataHandler) -> None:
    summary = handler.get_summary()
    if not summary:
        print("No numeric columns.")
        return
    for col, s in summary.items():
        print(f"  {col}: min={s.min:.2f} max={s.max:.2f} avg={s.avg:.2f} count={s.count}")


def _print_preview(handler: DataHandler) -> None:
    frame = handler.dataset.to_frame().head(handler.preview_rows)
    print(frame.to_string(index=False) if not frame.empty else "(no rows)")


def _print_chart(handler: DataHandler, kind: str) -> None:
    chart = project(handler.dataset, kind)
    if not chart:
        print("No data available for visualization")
        return
    print(json.dumps(chart.to_dict(), indent=2, default=str))


def _print_outliers(handler: DataHandler, column: str) -> None:
    try:
        positions = handler.detect_anomalies(column)
    except ValueError as e:
        print(e)
        return
    if not positions:
        print(f"No outliers found in {column}.")
        return
    print(f"Outlier rows in {column}: " + ", ".join(str(p + 1) for p in positions))


def parse_command(text: str, columns: List[str]) -> Optional[Tuple[str, Optional[str]]]:
    """Return ``(command, argument)`` when ``text`` is a CLI command, else ``None``.

    Only the bare words ``stats`` and ``preview``, ``chart <kind>`` with a
    known kind and ``outliers <column>`` with an existing column count as
    commands; anything else is a question for the agent.
    """
    stripped = text.strip()
    word, _, rest = stripped.partition(" ")
    word = word.lower()
    rest = rest.strip()
    if word in ("stats", "preview") and not rest:
        return word, None
    if word == "chart" and rest.lower() in CHART_KINDS:
        return word, rest.lower()
    if word == "outliers" and rest in columns:
        return word, rest
    return None


def main(argv: Optional[list] = None) -> int:
    args = parse_args(argv)
    settings = Settings()
    if args.no_delay:
        settings.response_delay = 0.0
        settings.scrape_delay = 0.0
    logging.basicConfig(
        level=logging.DEBUG if args.debug else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    state = AppState(settings=settings)
    if not _load(state, args):
        return 1
    handler = DataHandler(state.active_dataset, preview_rows=settings.preview_rows)
    overview = handler.overview()
    print(f"\n{overview['name']}: {overview['rows']} rows, {overview['columns']} columns, "
          f"{overview['numeric_columns']} numeric, type {overview['type']}")
    _print_stats(handler)
    for card in handler.insights():
        print(f"- {card['title']}: {card['text']}")
    if args.chart:
        _print_chart(handler, args.chart)

    agent = ChatAgent(dataset=state.active_dataset, response_delay=settings.response_delay, debug=args.debug)
    state.set_view("query")
    print(f"\n{agent.history[0].content}")
    print("Suggested questions:")
    for suggestion in SUGGESTED_QUERIES:
        print(f"  - {suggestion}")
    print("Commands: stats, preview, chart <kind>, outliers <column>. Type 'exit' to quit.\n")
    while True:
        try:
            question = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nExiting.")
            break
        if not question:
            continue
        if question.lower() in {"exit", "quit"}:
            print("Goodbye!")
            break
        parsed = parse_command(question, handler.get_columns())
        command, arg = parsed if parsed else (None, None)
        if command == "stats":
            _print_stats(handler)
        elif command == "preview":
            _print_preview(handler)
        elif command == "chart":
            _print_chart(handler, arg)
        elif command == "outliers":
            _print_outliers(handler, arg)
        else:
            print("AI is analyzing your request...")
            print(agent.ask_sync(question))
        print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
