# doclocator/cli.py
"""
doclocator CLI -- Click commands with a rich terminal UI.

Provides the ``doclocator`` console entry-point declared in pyproject.toml as
``doclocator.cli:cli``.  Commands call into the library modules:

- locate:   resolve a passage, table or span to an anchor in a document
- display:  title/body the result list would show for each query result
- tables:   tables without loaded results and the document-fetch filter
- query-params: passage parameters for a search request
- config:   DoclocatorConfig display
"""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

import click
from rich.console import Console

from . import __version__
from . import cli_theme as theme
from .config import get_config

if TYPE_CHECKING:
    from .query.models import QueryResponse

console = Console()


def _print_version(
    ctx: click.Context,
    _param: click.Parameter,
    value: bool,
) -> None:
    if not value or ctx.resilient_parsing:
        return
    theme.print_version(__version__, console)
    ctx.exit()


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"Invalid JSON in {path}: {exc}")


def _load_response(path: Path) -> QueryResponse:
    from pydantic import ValidationError

    from .query.models import QueryResponse

    data = _read_json(path)
    try:
        return QueryResponse.model_validate(data)
    except ValidationError as exc:
        raise click.ClickException(f"Not a query response: {path}\n{exc}")


def _write_output(output: Path, data: dict[str, Any]) -> None:
    suffix = output.suffix.lower()
    output.parent.mkdir(parents=True, exist_ok=True)
    if suffix in (".yaml", ".yml"):
        import yaml

        output.write_text(
            yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True),
            encoding="utf-8",
        )
    else:
        if not suffix:
            output = output.with_suffix(".json")
        output.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    console.print(theme.ok(f"Saved to {output}"))


def _truncate(text: str, max_len: int) -> str:
    text = " ".join(text.split())
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


# ---------------------------------------------------------------------------
# Main CLI group
# ---------------------------------------------------------------------------


@click.group(invoke_without_command=True)
@click.option(
    "--version",
    is_flag=True,
    callback=_print_version,
    expose_value=False,
    is_eager=True,
    help="Show version and exit.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log DEBUG detail to stderr and the session log file.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """doclocator -- resolve search evidence to anchors in document previews."""
    if verbose:
        from .utils.logging import setup_logging

        setup_logging(level="DEBUG", console_output=True)
    if ctx.invoked_subcommand is None:
        theme.print_banner(__version__, console)
        click.echo(ctx.get_help())


# ---------------------------------------------------------------------------
# locate
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("document", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--pdf", "pdf_path", type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None, help="PDF file backing a structured document.")
@click.option("--passage", type=int, default=None, help="Index into the record's document_passages.")
@click.option("--table", type=int, default=None, help="Index into the record's table_results.")
@click.option("--begin", type=int, default=None, help="Begin offset of a free highlight.")
@click.option("--end", type=int, default=None, help="End offset of a free highlight.")
@click.option("--text", type=str, default=None, help="Literal text to find (HTML/JSON documents).")
@click.option("--output", "-o", type=click.Path(path_type=Path), default=None, help="Save the anchor to file (.json or .yaml/.yml).")
def locate(
    document: Path,
    pdf_path: Optional[Path],
    passage: Optional[int],
    table: Optional[int],
    begin: Optional[int],
    end: Optional[int],
    text: Optional[str],
    output: Optional[Path],
) -> None:
    """Resolve evidence to a renderable anchor inside a document.

    \b
    Evidence is one of: a passage of the record (--passage), a table result
    of the record (--table), or a free highlight (--begin/--end and/or --text).

    \b
    Examples:
      doclocator locate doc.json --passage 0
      doclocator locate doc.json --pdf doc.pdf --table 0
      doclocator locate doc.json --begin 40 --end 60
      doclocator locate page.json --text "how are ya" -o anchor.json
    """
    from pydantic import ValidationError

    from .documents import DocumentLoadError, StructuredDocument, load_document
    from .fields import resolve_field
    from .locator import (
        HighlightEvidence,
        PageAnchor,
        PassageEvidence,
        locate as locate_evidence,
        passage_evidence,
        table_evidence,
    )
    from .spans import Span

    chosen = [passage is not None, table is not None, begin is not None or end is not None or text is not None]
    if sum(chosen) > 1:
        raise click.ClickException("Use only one of --passage, --table, or --begin/--end/--text.")
    if (begin is None) != (end is None):
        raise click.ClickException("--begin and --end must be given together.")

    record = _read_json(document)
    pdf = pdf_path.read_bytes() if pdf_path is not None else None
    try:
        doc = load_document(record, pdf=pdf)
    except DocumentLoadError as exc:
        raise click.ClickException(str(exc))

    evidence = None
    try:
        if passage is not None:
            raw = resolve_field(record, f"document_passages[{passage}]")
            if not isinstance(raw, dict):
                raise click.ClickException(f"No passage at index {passage}.")
            evidence = passage_evidence(raw)
        elif table is not None:
            raw = resolve_field(record, f"table_results[{table}]")
            if not isinstance(raw, dict):
                raise click.ClickException(f"No table result at index {table}.")
            evidence = table_evidence(raw)
    except ValidationError as exc:
        raise click.ClickException(f"Malformed evidence in {document}:\n{exc}")

    if begin is not None and end is not None:
        evidence = HighlightEvidence(span=Span(begin, end), text=text)
    elif text is not None:
        evidence = PassageEvidence(span=None, text=text)

    t0 = time.perf_counter()
    anchor = locate_evidence(doc, evidence)
    duration = time.perf_counter() - t0

    theme.section("Document", console, "01")
    t = theme.make_kv_table()
    t.add_row("document_id", doc.document_id or "[dim]unknown[/dim]")
    t.add_row("kind", theme.badge(doc.kind.value.upper()))
    if isinstance(doc, StructuredDocument):
        t.add_row("pages", str(doc.page_count))
        t.add_row("blocks", str(len(doc.blocks)))
    t.add_row("evidence", evidence.kind.value if evidence is not None else "[dim]none[/dim]")
    console.print(t)

    theme.section("Anchor", console, "02")
    if anchor is None:
        console.print(theme.warn("No anchor; the document renders without a highlight."))
    elif isinstance(anchor, PageAnchor):
        rt = theme.make_table()
        rt.add_column("Region", justify="right")
        rt.add_column("Page", justify="right")
        rt.add_column("Box")
        rt.add_column("Span")
        for i, region in enumerate(anchor.regions):
            rt.add_row(
                "primary" if i == 0 else str(i),
                str(region.page_index),
                ", ".join(f"{v:g}" for v in region.bbox.to_list()),
                f"[{region.span.begin}, {region.span.end})",
            )
        console.print(rt)
    else:
        t = theme.make_kv_table()
        for key, value in anchor.to_dict().items():
            t.add_row(key, json.dumps(value) if isinstance(value, dict) else str(value))
        console.print(t)

    if output is not None:
        from .envelope import build_envelope

        _write_output(output, {
            "anchor": anchor.to_dict() if anchor is not None else None,
            "_doclocator": build_envelope(
                command="locate",
                document_id=doc.document_id,
                document_kind=doc.kind.value,
                evidence_kind=evidence.kind.value if evidence is not None else None,
                anchor_kind=anchor.kind.value if anchor is not None else None,
                duration_s=round(duration, 6),
            ),
        })
    console.print()


# ---------------------------------------------------------------------------
# display
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("response", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--title-field", type=str, default=None, help="Field path for the result title.")
@click.option("--body-field", type=str, default=None, help="Field path for the result body.")
@click.option(
    "--passages",
    type=click.Choice(["auto", "on", "off"], case_sensitive=False),
    default="auto",
    show_default=True,
    help="Use the first passage as body: auto (when present, or per config), on, off.",
)
@click.option("--render-html", is_flag=True, default=False, help="Keep HTML markup in passages and body text.")
@click.option("--collections", type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None, help="List-collections response used to label results.")
@click.option("--component-settings", type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None, help="Component settings JSON with fields_shown defaults.")
@click.option("--output", "-o", type=click.Path(path_type=Path), default=None, help="Save display fields to file (.json or .yaml/.yml).")
def display(
    response: Path,
    title_field: Optional[str],
    body_field: Optional[str],
    passages: str,
    render_html: bool,
    collections: Optional[Path],
    component_settings: Optional[Path],
    output: Optional[Path],
) -> None:
    """Show the title and body the result list displays for each result.

    \b
    Examples:
      doclocator display response.json
      doclocator display response.json --body-field "highlight.text[0]" --passages off
    """
    from .display import get_display_settings, select_display_fields
    from .query.models import CollectionsResult
    from .query.results import find_collection_name

    cfg = get_config()
    use_passages = {"on": True, "off": False}.get(passages.lower(), cfg.use_passages)
    query_response = _load_response(response)
    settings = get_display_settings(
        {
            "title_field": title_field or cfg.title_field,
            "body_field": body_field or cfg.body_field,
            "use_passages": use_passages,
        },
        _read_json(component_settings) if component_settings is not None else None,
    )
    collections_result = (
        CollectionsResult.model_validate(_read_json(collections)) if collections is not None else None
    )

    theme.section("Results", console, "01")
    if not query_response.results:
        console.print(theme.info(cfg.no_results_text))
        console.print()
        return

    t = theme.make_table()
    t.add_column("#", justify="right")
    t.add_column("Title", style="bold")
    t.add_column("Body")
    t.add_column("Source")
    if collections_result is not None:
        t.add_column(cfg.collection_label.rstrip(":"))

    rows: list[dict[str, Any]] = []
    for i, result in enumerate(query_response.results):
        fields = select_display_fields(
            result,
            settings,
            empty_text=cfg.empty_result_text,
            render_html=render_html or cfg.render_html,
            default_body_field=cfg.default_body_field,
        )
        row = [str(i), fields.title, _truncate(fields.body, 80), fields.body_source]
        collection_name = None
        if collections_result is not None:
            collection_name = find_collection_name(collections_result, result)
            row.append(collection_name or "")
        t.add_row(*row)
        rows.append({
            "document_id": result.get("document_id"),
            "title": fields.title,
            "body": fields.body,
            "body_source": fields.body_source,
            "collection_name": collection_name,
        })
    console.print(t)

    if output is not None:
        from .envelope import build_envelope

        _write_output(output, {"results": rows, "_doclocator": build_envelope(command="display")})
    console.print()


# ---------------------------------------------------------------------------
# tables
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("response", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def tables(response: Path) -> None:
    """List table results and the filter that fetches their missing documents.

    \b
    Examples:
      doclocator tables response.json
    """
    from .query.results import pending_document_fetch, result_for_table

    query_response = _load_response(response)

    theme.section("Tables", console, "01")
    if not query_response.table_results:
        console.print(theme.info("No table results."))
        console.print()
        return

    t = theme.make_table()
    t.add_column("Table")
    t.add_column("Source document")
    t.add_column("Location")
    t.add_column("Loaded")
    for table in query_response.table_results:
        loc = table.location
        t.add_row(
            table.table_id,
            table.source_document_id,
            f"[{loc.begin}, {loc.end})" if loc is not None else "[dim]none[/dim]",
            "yes" if result_for_table(table, query_response.results) is not None else "no",
        )
    console.print(t)

    filter_string = pending_document_fetch(query_response)
    theme.section("Document fetch", console, "02")
    if filter_string is None:
        console.print(theme.ok("All source documents are loaded."))
    else:
        console.print(f"  {filter_string}", markup=False, highlight=False)
    console.print()


# ---------------------------------------------------------------------------
# query-params
# ---------------------------------------------------------------------------


@cli.command("query-params")
@click.option("--passage-length", type=int, default=None, help="Passage length in characters (clamped to 50-2000); defaults to config.")
def query_params(passage_length: Optional[int]) -> None:
    """Print the passage parameters to send with a search request as JSON.

    \b
    Examples:
      doclocator query-params
      doclocator query-params --passage-length 800
    """
    from .query.results import passage_query_params

    if passage_length is None:
        passage_length = get_config().passage_length
    click.echo(json.dumps(passage_query_params(passage_length), indent=2))


# ---------------------------------------------------------------------------
# config (group)
# ---------------------------------------------------------------------------


@cli.group()
def config() -> None:
    """View doclocator configuration."""


@config.command("show")
def config_show() -> None:
    """Show current configuration.

    \b
    Examples:
      doclocator config show
    """
    cfg = get_config()
    dump = cfg.model_dump()

    def _opt(value: Any) -> str:
        return "[dim]not set[/dim]" if value is None else str(value)

    # 01 · Display
    theme.section("Display", console, "01")
    t = theme.make_kv_table()
    t.add_row("title_field", _opt(dump["title_field"]))
    t.add_row("body_field", _opt(dump["body_field"]))
    t.add_row("default_body_field", dump["default_body_field"])
    t.add_row("use_passages", _opt(dump["use_passages"]))
    t.add_row("passage_length", str(dump["passage_length"]))
    t.add_row("render_html", str(dump["render_html"]))
    console.print(t)

    # 02 · Messages
    theme.section("Messages", console, "02")
    t = theme.make_kv_table()
    t.add_row("empty_result_text", dump["empty_result_text"])
    t.add_row("no_results_text", dump["no_results_text"])
    t.add_row("collection_label", dump["collection_label"])
    console.print(t)

    # 03 · Paths
    theme.section("Paths", console, "03")
    t = theme.make_kv_table()
    t.add_row("home_dir", str(dump["home_dir"]))
    t.add_row("log_dir", str(cfg.log_dir))
    t.add_row("log_level", dump["log_level"])
    console.print(t)
    console.print()
