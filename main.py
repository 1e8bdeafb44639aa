#!/usr/bin/env python3
"""Parfum Consultant CLI."""

import argparse
import json
import logging
import sys

from dotenv import load_dotenv

from agents.consultant import ParfumConsultant
from config.settings import Settings
from errors import NotFoundError, ParfumError
from llm.factory import create_llm_client
from retrieval.catalog_store import CatalogStore
from schemas.parfum import Gender, Parfum, RecommendationRequest


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Parfum Consultant - catalog management and AI fragrance advice"
    )
    parser.add_argument(
        "--catalog",
        type=str,
        help="Path to the parfum catalog JSON (default: $PARFUM_CATALOG_PATH or data/parfums.json)"
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output"
    )

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List every parfum")
    sub.add_parser("stats", help="Show catalog statistics")
    sub.add_parser("brands", help="List reference brands")
    sub.add_parser("categories", help="List reference categories")

    search = sub.add_parser("search", help="Search name, brand, category and description")
    search.add_argument("query")

    show = sub.add_parser("show", help="Show one parfum as JSON")
    show.add_argument("id")

    add = sub.add_parser("add", help="Add a parfum from a JSON file")
    add.add_argument("--json", dest="json_path", required=True, help="File with the parfum fields")

    update = sub.add_parser("update", help="Update fields of a parfum")
    update.add_argument("id")
    update.add_argument(
        "--set",
        dest="assignments",
        action="append",
        required=True,
        metavar="FIELD=VALUE",
        help="Field to overwrite; VALUE is parsed as JSON unless the field is text"
    )

    delete = sub.add_parser("delete", help="Delete a parfum")
    delete.add_argument("id")

    recommend = sub.add_parser("recommend", help="Get AI parfum recommendations")
    recommend.add_argument("--preferences", "-p", required=True, help="Describe what you like")
    recommend.add_argument("--gender", choices=[g.value for g in Gender], default=Gender.UNISEX.value)
    recommend.add_argument("--occasion", action="append", default=[], help="Repeatable")
    recommend.add_argument("--season", action="append", default=[], help="Repeatable")
    recommend.add_argument("--budget", default="Any")

    ask = sub.add_parser("ask", help="Ask anything about parfums")
    ask.add_argument("question")

    compare = sub.add_parser("compare", help="Compare two parfums by name")
    compare.add_argument("first")
    compare.add_argument("second")

    return parser


def parse_assignments(assignments: list[str]) -> dict:
    """
    Turn FIELD=VALUE pairs into an update dict.

    Values for text fields are kept verbatim; anything else is parsed as
    JSON when possible (e.g. year_released=2015, notes={...}).
    """
    changes = {}
    for assignment in assignments:
        field, sep, raw = assignment.partition("=")
        if not sep or not field:
            raise ValueError(f"Expected FIELD=VALUE, got: {assignment}")
        model_field = Parfum.model_fields.get(field)
        if model_field is not None and model_field.annotation is str:
            changes[field] = raw
            continue
        try:
            changes[field] = json.loads(raw)
        except json.JSONDecodeError:
            changes[field] = raw
    return changes


def format_table(parfums: list[Parfum]) -> str:
    """Render parfums as a fixed-width text table."""
    header = f"{'ID':<5}{'Name':<24}{'Brand':<18}{'Category':<22}{'Gender':<8}{'Price':<12}{'Year':<6}"
    rows = [header, "-" * len(header)]
    for p in parfums:
        rows.append(
            f"{p.id:<5}{p.name[:23]:<24}{p.brand[:17]:<18}{p.category[:21]:<22}"
            f"{p.gender.value:<8}{p.price_range.value:<12}{p.year_released:<6}"
        )
    return "\n".join(rows)


def run(args: argparse.Namespace, settings: Settings) -> str:
    """Execute one command and return the text to print."""
    store = CatalogStore(settings.catalog_path)

    if args.command == "list":
        return format_table(store.list_all())

    if args.command == "search":
        results = store.search(args.query)
        if not results:
            return "No parfums found for that keyword."
        return f"Found {len(results)} parfum(s):\n\n{format_table(results)}"

    if args.command == "show":
        parfum = store.get_by_id(args.id)
        if parfum is None:
            raise NotFoundError(f"Parfum with ID {args.id} not found", identifier=args.id)
        return json.dumps(parfum.to_record(), indent=2, ensure_ascii=False)

    if args.command == "stats":
        stats = store.stats()
        lines = [
            f"Total Parfums: {stats.total_parfums}",
            f"Total Brands: {stats.total_brands}",
            f"Total Categories: {stats.total_categories}",
            "",
            "Distribution by Gender:",
        ]
        lines.extend(f"  {gender}: {count}" for gender, count in stats.gender_distribution.items())
        lines.extend(["", "Distribution by Price Range:"])
        lines.extend(f"  {price}: {count}" for price, count in stats.price_distribution.items())
        return "\n".join(lines)

    if args.command == "brands":
        return "\n".join(store.get_all_brands())

    if args.command == "categories":
        return "\n".join(store.get_all_categories())

    if args.command == "add":
        with open(args.json_path, "r", encoding="utf-8") as f:
            fields = json.load(f)
        parfum = store.add(fields)
        return f"Added parfum {parfum.name} with ID {parfum.id}"

    if args.command == "update":
        parfum = store.update(args.id, parse_assignments(args.assignments))
        return f"Updated parfum {parfum.id}: {parfum.name}"

    if args.command == "delete":
        parfum = store.delete(args.id)
        return f"Deleted parfum {parfum.id}: {parfum.name}"

    # Consultation commands need the model
    consultant = ParfumConsultant(
        create_llm_client(settings),
        response_language=settings.response_language
    )
    catalog = store.load()

    if args.command == "recommend":
        request = RecommendationRequest(
            gender=Gender(args.gender),
            occasions=args.occasion,
            seasons=args.season,
            budget=args.budget,
            preferences=args.preferences,
        )
        return consultant.recommend(request, catalog)

    if args.command == "ask":
        return consultant.answer_question(args.question, catalog)

    if args.command == "compare":
        return consultant.compare(args.first, args.second, catalog)

    raise ValueError(f"Unknown command: {args.command}")


def main(argv=None):
    """Main CLI entry point."""
    load_dotenv()
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    settings = Settings(catalog_path=args.catalog, verbose=args.verbose)

    try:
        output = run(args, settings)
    except (ParfumError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)

    print(output)


if __name__ == "__main__":
    main()
