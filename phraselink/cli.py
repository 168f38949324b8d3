#!/usr/bin/env python3
"""
PhraseLink CLI Interface
Command-line interface for matching text against the phrase catalog
"""

import sys
import argparse
import json
import logging
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from phraselink.core.builder import regenerate
from phraselink.core.config import PhraseLinkConfig
from phraselink.core.errors import IndexOutOfRange, PhraseLinkError
from phraselink.core.models import LookupEntry
from phraselink.core.store import PhraseCatalog, PhraseStore

console = Console()
logger = logging.getLogger("phraselink")


def setup_logging(level: str):
    """Send log records to stderr through rich"""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True
    )


class PhraseLinkCLI:
    """Command-line interface for the phrase catalog"""

    def __init__(self, config: PhraseLinkConfig):
        self.config = config
        self._catalog: Optional[PhraseCatalog] = None

    @property
    def catalog(self) -> PhraseCatalog:
        # Loaded on first use so that --build works without a lookup document
        if self._catalog is None:
            self._catalog = PhraseCatalog.load(self.config)
        return self._catalog

    def build(self, format: str):
        """Regenerate the lookup document and print it for the operator to commit"""
        lemma_of = None
        if self.config.normalizer.lemmatize:
            from phraselink.core.lemmatizer import SpacyLemmatizer
            lemma_of = SpacyLemmatizer(self.config.normalizer.spacy_model)

        phrases = PhraseStore.from_file(self.config.data.phrases_path)
        text = regenerate(list(phrases), format=format, lemma_of=lemma_of)

        # Plain stdout so the document can be redirected to a file untouched
        sys.stdout.write(text)
        if not text.endswith("\n"):
            sys.stdout.write("\n")

    def match(self, text: str, as_json: bool = False):
        """Show every cataloged phrase referenced in text"""
        normalized = self.catalog.normalize(text)
        results = self.catalog.find_matches(normalized)

        if as_json:
            payload = {
                "normalized": normalized,
                "matches": [result.to_dict() for result in results]
            }
            sys.stdout.write(json.dumps(payload, indent=2, ensure_ascii=False) + "\n")
            return results

        if not results:
            console.print("No cataloged phrases found.", style="yellow")
            return results

        table = Table(title=f"🔎 Matches in: {escape(normalized)}")
        table.add_column("Index", style="cyan", justify="right")
        table.add_column("Phrase", style="green")
        table.add_column("Found", style="yellow")
        table.add_column("Relevance", style="magenta", justify="right")

        for result in results:
            record = self.catalog.fetch_phrase(result.lookup.index)
            found = ", ".join(
                f"'{normalized[loc.index:loc.end]}'@{loc.index}" for loc in result.locations
            )
            table.add_row(str(result.lookup.index), escape(record.phrase), escape(found),
                          str(result.lookup.relevance))

        console.print(table)
        return results

    def show(self, index: int):
        """Display one catalog entry with its connections"""
        try:
            entry = self.catalog.fetch_lookup(index)
        except IndexOutOfRange as e:
            console.print(f"❌ {e}", style="red")
            return None

        self._print_entry(entry)
        return entry

    def seed(self):
        """Display the most relevant entry"""
        entry = self.catalog.most_relevant_entry
        if entry is None:
            console.print("The catalog is empty.", style="yellow")
            return None
        self._print_entry(entry)
        return entry

    def stats(self):
        stats_table = Table(title="📊 Catalog Statistics")
        stats_table.add_column("Metric", style="cyan")
        stats_table.add_column("Value", style="green")

        for key, value in self.catalog.get_stats().items():
            stats_table.add_row(key.replace("_", " ").title(), str(value))

        console.print(stats_table)

    def _print_entry(self, entry: LookupEntry):
        record = self.catalog.fetch_phrase(entry.index)

        lines = [f"[bold]{escape(record.phrase)}[/bold]", escape(record.meaning)]
        if record.category is not None:
            lines.append(f"[cyan]Category:[/cyan] {escape(record.category)}")
        if record.acronyms:
            lines.append(f"[cyan]Acronyms:[/cyan] {escape(', '.join(record.acronyms))}")
        lines.append(f"[cyan]Lemmas:[/cyan] {escape(' | '.join(entry.lemmas))}")
        lines.append(f"[cyan]Relevance:[/cyan] {entry.relevance}")

        console.print(Panel("\n".join(lines), title=f"#{entry.index}", border_style="cyan"))

        connected = self.catalog.expand_connections(entry)
        if connected:
            table = Table(title="🔗 Connections")
            table.add_column("Index", style="cyan", justify="right")
            table.add_column("Phrase", style="green")
            for other in connected:
                table.add_row(str(other.index), escape(self.catalog.fetch_phrase(other.index).phrase))
            console.print(table)

    def interactive_mode(self):
        """Run interactive matching mode"""
        console.print(Panel(
            "[bold cyan]PhraseLink Interactive Mode[/bold cyan]\n"
            "Type or paste text to find cataloged phrases, or use commands:\n"
            "  /help - Show commands\n"
            "  /show <index> - Show an entry and its connections\n"
            "  /find <query> - Search phrases and meanings\n"
            "  /seed - Show the most relevant entry\n"
            "  /stats - Show catalog statistics\n"
            "  /exit - Exit",
            title="Welcome to PhraseLink",
            border_style="cyan"
        ))

        while True:
            try:
                text = console.input("\n[bold cyan]Text:[/bold cyan] ")

                if text.startswith("/"):
                    if not self._handle_command(text):
                        break
                elif text.strip():
                    self.match(text)

            except (KeyboardInterrupt, EOFError):
                console.print("\n👋 Goodbye!", style="yellow")
                break
            except PhraseLinkError as e:
                console.print(f"❌ Error: {str(e)}", style="red")

    def _handle_command(self, command: str) -> bool:
        """Handle special commands; returns False to leave interactive mode"""
        parts = command.split(maxsplit=1)
        cmd = parts[0].lower()

        if cmd == "/exit":
            console.print("👋 Goodbye!", style="yellow")
            return False

        elif cmd == "/help":
            help_text = """
[bold]Available Commands:[/bold]
  /help            - Show this help
  /show <index>    - Show an entry and its connections
  /find <query>    - Search phrases and meanings
  /seed            - Show the most relevant entry
  /stats           - Show catalog statistics
  /exit            - Exit the program
            """
            console.print(Panel(help_text, title="Help", border_style="green"))

        elif cmd == "/show" and len(parts) > 1:
            if parts[1].strip().isdigit():
                self.show(int(parts[1]))
            else:
                console.print(f"Not an index: {escape(parts[1])}", style="red")

        elif cmd == "/find" and len(parts) > 1:
            records = self.catalog.search_phrases(parts[1])
            if not records:
                console.print("No phrases found.", style="yellow")
            for record in records[:10]:
                console.print(f"[green]{escape(record.phrase)}[/green]: {escape(record.meaning)}")

        elif cmd == "/seed":
            self.seed()

        elif cmd == "/stats":
            self.stats()

        else:
            console.print(f"Unknown command: {cmd}", style="red")

        return True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="phraselink",
        description="PhraseLink - match text against a catalog of domain phrases",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode
  phraselink

  # Regenerate the lookup document (review, then commit it yourself)
  phraselink --build > data/lookup.json.new

  # Find cataloged phrases in a piece of text
  phraselink --match "Coverage for the insurer's E&O claims"

  # Show an entry and what it connects to
  phraselink --show 12
        """
    )

    action = parser.add_mutually_exclusive_group()
    action.add_argument("--build", "-b", action="store_true",
                        help="Print a regenerated lookup document to stdout")
    action.add_argument("--match", "-m", help="Text to search for cataloged phrases")
    action.add_argument("--show", "-s", type=int, help="Show the entry at this index")
    action.add_argument("--seed", action="store_true", help="Show the most relevant entry")
    action.add_argument("--stats", action="store_true", help="Show catalog statistics")

    parser.add_argument("--json", action="store_true", help="Print --match results as JSON")
    parser.add_argument("--format", choices=["json", "yaml"],
                        help="Output format of --build (default: json)")
    parser.add_argument("--config", "-c", help="YAML configuration file")
    parser.add_argument("--phrases", help="Path to the phrase-records document")
    parser.add_argument("--lookup", help="Path to the lookup-entries document")
    parser.add_argument("--lemmatize", action="store_true",
                        help="Reduce words to their base form with spaCy")
    parser.add_argument("--log-level", help="Logging level (default: INFO)")

    return parser


def load_config(args: argparse.Namespace) -> PhraseLinkConfig:
    """Configuration file, then environment, then command-line flags"""
    if args.config:
        config = PhraseLinkConfig.load_from_file(args.config)
    else:
        config = PhraseLinkConfig()

    if args.phrases:
        config.data.phrases_path = args.phrases
    if args.lookup:
        config.data.lookup_path = args.lookup
    if args.lemmatize:
        config.normalizer.lemmatize = True
    if args.log_level:
        config.log_level = args.log_level.upper()
    if args.format:
        config.output_format = args.format

    return config


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args)
        setup_logging(config.log_level)
    except ValueError as e:
        console.print(f"❌ {str(e)}", style="red")
        return 1

    cli = PhraseLinkCLI(config)

    try:
        if args.build:
            cli.build(config.output_format)
        elif args.match is not None:
            cli.match(args.match, as_json=args.json)
        elif args.show is not None:
            if cli.show(args.show) is None:
                return 1
        elif args.seed:
            cli.seed()
        elif args.stats:
            cli.stats()
        else:
            cli.interactive_mode()

    except PhraseLinkError as e:
        logger.error(f"{type(e).__name__}: {e}")
        console.print(f"❌ {str(e)}", style="red")
        return 1
    except (FileNotFoundError, ValueError) as e:
        console.print(f"❌ {str(e)}", style="red")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
