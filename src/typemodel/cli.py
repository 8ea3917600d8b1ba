#!/usr/bin/env python3
"""
Command-line interface for Typemodel.

Provides commands for extracting the intermediate type model of a Java
project and inspecting the result.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from codetiming import Timer
from rich import markup
from rich.console import Console

from .console_styles import (
    create_data_table,
    create_header_panel,
    create_summary_table,
    format_count,
    format_kind,
    get_status_icon,
)
from .extractor import (
    ExtractedClass,
    ExtractedEnum,
    ExtractionError,
    ExtractionProperties,
    IntermediateModel,
    ProjectExtractor,
    TypeKind,
)
from .extractor.properties import DEFAULT_EXCEPTION_ROOT, DEFAULT_MAX_RESOLUTION_DEPTH
from .provider import JavaProject
from .provider.java_source import DEFAULT_EXCLUDE_PATTERNS

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


def _create_project(
    path: str,
    libraries: tuple[str, ...],
    exclude: tuple[str, ...],
    include: tuple[str, ...],
) -> JavaProject:
    # Start with defaults, includes remove from them
    exclusions = [e for e in DEFAULT_EXCLUDE_PATTERNS if e not in include]
    exclusions.extend(exclude)
    if exclusions:
        console.print(f"[dim]Excluding:[/dim] {', '.join(exclusions)}")
    return JavaProject(Path(path), library_paths=libraries, exclude_patterns=exclusions)


def _run_extraction(project: JavaProject, properties: ExtractionProperties) -> IntermediateModel:
    """Extract a model, turning extraction errors into exit status 1."""
    try:
        return ProjectExtractor(properties).extract(project)
    except ExtractionError as e:
        console.print(f"[red]Error:[/red] {markup.escape(str(e))}")
        sys.exit(1)


def _type_string(data_type) -> str:
    return markup.escape(data_type.type_string) if data_type is not None else "void"


@click.group()
@click.version_option(version="0.1.0")
def cli() -> None:
    """Typemodel - intermediate type model extraction for Java projects.

    Reads the type declarations of a Java source tree and builds a model of
    its classes, interfaces and enums with fully qualified, generic-aware
    data types. Types referenced from outside the project are added as
    external stubs.

    Examples:
        typemodel extract ./my-project --output model.json
        typemodel extract ./app --library ./shared/src --no-externals
        typemodel show ./my-project --type com.example.Foo
    """
    pass


@cli.command()
@click.argument("path", type=click.Path(exists=True, file_okay=False, dir_okay=True))
@click.option(
    "--library",
    "libraries",
    multiple=True,
    type=click.Path(exists=True, file_okay=False, dir_okay=True),
    help="Source directory of a dependency (can be specified multiple times)",
)
@click.option(
    "--exclude",
    multiple=True,
    help="Directory names to exclude (can be specified multiple times)",
)
@click.option(
    "--include",
    multiple=True,
    help="Override default exclusions (e.g., --include build)",
)
@click.option(
    "--no-externals",
    is_flag=True,
    help="Do not add stubs for types declared outside the project",
)
@click.option(
    "--max-depth",
    type=click.IntRange(min=1),
    default=DEFAULT_MAX_RESOLUTION_DEPTH,
    help=f"Maximum generic nesting and supertype chain length (default: {DEFAULT_MAX_RESOLUTION_DEPTH})",
)
@click.option(
    "--exception-root",
    default=DEFAULT_EXCEPTION_ROOT,
    help=f"Root type of the exception lineage (default: {DEFAULT_EXCEPTION_ROOT})",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the model as JSON to this file",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def extract(
    path: str,
    libraries: tuple[str, ...],
    exclude: tuple[str, ...],
    include: tuple[str, ...],
    no_externals: bool,
    max_depth: int,
    exception_root: str,
    output: Optional[str],
    verbose: bool,
) -> None:
    """Extract the type model of a Java project.

    PATH: Directory containing the Java sources

    Examples:
        typemodel extract ./src
        typemodel extract /path/to/project --exclude generated -o model.json
    """
    _configure_logging(verbose)
    project = _create_project(path, libraries, exclude, include)
    properties = ExtractionProperties(
        extract_external_types=not no_externals,
        max_resolution_depth=max_depth,
        exception_root=exception_root,
    )

    console.print(f"[cyan]Extracting type model of:[/cyan] {Path(path).resolve()}")
    timer = Timer(logger=None)
    timer.start()
    model = _run_extraction(project, properties)
    elapsed = timer.stop()

    kinds = [t.kind for t in model.types.values()]
    table = create_summary_table("Extraction Results")
    table.add_row("Types", format_count(len(model.types)))
    table.add_row("Classes", format_count(kinds.count(TypeKind.CLASS)))
    table.add_row("Interfaces", format_count(kinds.count(TypeKind.INTERFACE)))
    table.add_row("Enums", format_count(kinds.count(TypeKind.ENUM)))
    table.add_row(
        "Exception types",
        format_count(
            sum(1 for t in model.types.values() if isinstance(t, ExtractedClass) and t.throwable)
        ),
    )
    table.add_row("Attributes", format_count(sum(len(t.attributes) for t in model.types.values())))
    table.add_row("Methods", format_count(sum(len(t.methods) for t in model.types.values())))
    table.add_row("External types", format_count(len(model.external_types)))

    console.print(f"\n{get_status_icon(True)} [bold green]Extraction complete![/bold green]")
    console.print(table)
    console.print(f"[dim]⏱  Extraction: {elapsed:.2f}s[/dim]")

    if output:
        output_path = Path(output)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(model.to_dict(), f, indent=2)
        console.print(f"\n[green]Model written to:[/green] {output_path}")


@cli.command()
@click.argument("path", type=click.Path(exists=True, file_okay=False, dir_okay=True))
@click.option(
    "--type",
    "type_name",
    default=None,
    help="Qualified name of a type to show in detail",
)
@click.option(
    "--library",
    "libraries",
    multiple=True,
    type=click.Path(exists=True, file_okay=False, dir_okay=True),
    help="Source directory of a dependency (can be specified multiple times)",
)
@click.option("--external", is_flag=True, help="List external types as well")
def show(path: str, type_name: Optional[str], libraries: tuple[str, ...], external: bool) -> None:
    """Show the types of a Java project, or the members of one type.

    PATH: Directory containing the Java sources

    Examples:
        typemodel show ./src
        typemodel show ./src --type com.example.Foo
    """
    _configure_logging(False)
    project = JavaProject(Path(path), library_paths=libraries)
    model = _run_extraction(project, ExtractionProperties())

    if type_name is None:
        _print_type_list(model, external)
        return

    extracted_type = model.get_type(type_name)
    if extracted_type is None:
        console.print(f"[red]Error:[/red] Type {markup.escape(type_name)} not found in the model")
        sys.exit(1)
    _print_type_details(extracted_type, model.is_external(type_name))


def _print_type_list(model: IntermediateModel, external: bool) -> None:
    table = create_data_table(
        f"Types of {model.project_name}",
        [
            ("Kind", "left", "white"),
            ("Type", "left", "cyan"),
            ("Super class", "left", "dim"),
            ("Attributes", "right", "green"),
            ("Methods", "right", "green"),
        ],
    )
    types = list(model.types.values())
    if external:
        types.extend(model.external_types.values())
    for extracted_type in types:
        super_class = ""
        if isinstance(extracted_type, ExtractedClass) and extracted_type.super_class:
            super_class = markup.escape(extracted_type.super_class.name)
        name = markup.escape(extracted_type.full_name)
        if model.is_external(extracted_type.full_name):
            name += " [dim](external)[/dim]"
        table.add_row(
            format_kind(extracted_type.kind.value),
            name,
            super_class,
            format_count(len(extracted_type.attributes)),
            format_count(len(extracted_type.methods)),
        )
    console.print(table)


def _print_type_details(extracted_type, is_external: bool) -> None:
    subtitle = format_kind(extracted_type.kind.value)
    if is_external:
        subtitle += " [dim](external)[/dim]"
    if isinstance(extracted_type, ExtractedClass):
        if extracted_type.super_class:
            subtitle += f"\nextends {_type_string(extracted_type.super_class)}"
        if extracted_type.throwable:
            subtitle += "\n[yellow]throwable[/yellow]"
    if extracted_type.interfaces:
        interfaces = ", ".join(_type_string(i) for i in extracted_type.interfaces)
        subtitle += f"\nimplements {interfaces}"
    console.print(create_header_panel(markup.escape(extracted_type.full_name), subtitle))

    if isinstance(extracted_type, ExtractedEnum) and extracted_type.enumerals:
        console.print(
            "[cyan]Constants:[/cyan] " + ", ".join(e.name for e in extracted_type.enumerals)
        )

    if extracted_type.attributes:
        attributes = create_data_table(
            "Attributes",
            [
                ("Name", "left", "cyan"),
                ("Type", "left", "white"),
                ("Access", "left", "dim"),
                ("Flags", "left", "yellow"),
            ],
        )
        for attribute in extracted_type.attributes:
            flags = " ".join(f for f, on in (("static", attribute.static), ("final", attribute.final)) if on)
            attributes.add_row(
                attribute.identifier,
                _type_string(attribute.data_type),
                attribute.modifier.value,
                flags,
            )
        console.print(attributes)

    if extracted_type.methods:
        methods = create_data_table(
            "Methods",
            [
                ("Name", "left", "cyan"),
                ("Parameters", "left", "white"),
                ("Returns", "left", "white"),
                ("Access", "left", "dim"),
            ],
        )
        for method in extracted_type.methods:
            parameters = ", ".join(
                f"{_type_string(p.data_type)} {p.identifier}" for p in method.parameters
            )
            returns = "" if method.constructor else _type_string(method.return_type)
            methods.add_row(method.name, parameters, returns, method.modifier.value)
        console.print(methods)
