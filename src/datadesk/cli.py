"""Command-line interface for the roster graph and admissions pipelines."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Sequence

from datadesk.admissions import GROUP_BY_CHOICES, METRIC_CHOICES, compute_index, compute_ratios
from datadesk.config import DEFAULT_CONTINENT_OVERRIDES, Continent, ContinentLookup, parse_continent
from datadesk.config_loader import ColumnProfile
from datadesk.export import (
    cluster_records,
    edges_to_records,
    index_chart_records,
    nodes_to_records,
    ratio_chart_records,
    records_to_csv,
)
from datadesk.graph import build_roster_graph, summarize_teammate_clusters
from datadesk.ingest import (
    EducationDataClient,
    load_admissions_csv,
    load_continent_csv,
    load_directory_csv,
    load_roster_csv,
)
from datadesk.models import RosterGraph


logger = logging.getLogger(__name__)


def _add_roster_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("roster", type=Path, help="Path to roster CSV (player, team, club)")
    parser.add_argument("--continents", type=Path, default=None, help="Country/continent CSV")
    parser.add_argument(
        "--roster-column",
        action="append",
        default=[],
        help="Mapping for roster CSV columns (e.g., club=Club Name)",
    )
    parser.add_argument(
        "--continent-column",
        action="append",
        default=[],
        help="Mapping for continent CSV columns (e.g., country=name)",
    )
    parser.add_argument(
        "--override",
        action="append",
        default=[],
        help="Continent override for a team (e.g., England=Europe)",
    )
    parser.add_argument("--load-profile", type=Path, help="Load column profile JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save column profile JSON", default=None)


def _add_admissions_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("admissions", type=Path, help="Admissions-enrollment CSV")
    parser.add_argument("directory", type=Path, help="Institution directory CSV")


def _add_output_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--output", type=Path, default=None, help="Output path (stdout if omitted)")
    parser.add_argument("--csv", action="store_true", help="Write CSV instead of JSON")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Data desk pipelines for rosters and admissions")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    graph = sub.add_parser("graph", help="Build club -> national team graph records")
    _add_roster_arguments(graph)
    _add_output_arguments(graph)

    clusters = sub.add_parser("clusters", help="Summarize club teammate clusters per team")
    _add_roster_arguments(clusters)
    _add_output_arguments(clusters)

    ratios = sub.add_parser("ratios", help="Applicants per enrolled student")
    _add_admissions_arguments(ratios)
    _add_output_arguments(ratios)

    index = sub.add_parser("index", help="Base-year indexed series by group")
    _add_admissions_arguments(index)
    _add_output_arguments(index)
    index.add_argument("--group-by", choices=GROUP_BY_CHOICES, default="institution_control")
    index.add_argument("--metric", choices=METRIC_CHOICES, default="enrolled")
    index.add_argument(
        "--base-year",
        type=int,
        default=None,
        help="Index to the first year at or after this one (default: each group's earliest year)",
    )

    fetch = sub.add_parser("fetch", help="Download IPEDS admissions and directory rows")
    fetch.add_argument("years", type=int, nargs="+", help="Years to fetch")
    fetch.add_argument("--admissions-out", type=Path, default=Path("admissions.csv"))
    fetch.add_argument("--directory-out", type=Path, default=Path("directory.csv"))
    fetch.add_argument("--base-url", default=None, help="Override the Education Data API base URL")
    return parser


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def _write(records: Sequence[dict[str, Any]] | dict[str, Any], args: argparse.Namespace) -> None:
    if args.csv:
        if isinstance(records, dict):
            raise SystemExit("--csv is not available for this command")
        text = records_to_csv(records)
    else:
        text = json.dumps(records, indent=2)
    if args.output:
        args.output.write_text(text, encoding="utf-8")
        print(f"Wrote {args.command} output to {args.output}")
    else:
        print(text)


def _load_graph(args: argparse.Namespace) -> RosterGraph:
    roster_mapping = _parse_mapping(args.roster_column)
    continent_mapping = _parse_mapping(args.continent_column)
    overrides: dict[str, Continent] = dict(DEFAULT_CONTINENT_OVERRIDES)

    if args.load_profile:
        profile = ColumnProfile.load(args.load_profile)
        roster_mapping = profile.roster_mapping | roster_mapping
        continent_mapping = profile.continent_mapping | continent_mapping
        overrides.update(profile.continent_overrides)
    for name, label in _parse_mapping(args.override).items():
        overrides[name] = parse_continent(label)

    players = load_roster_csv(args.roster, mapping=roster_mapping or None)
    lookup = (
        load_continent_csv(args.continents, mapping=continent_mapping or None)
        if args.continents
        else ContinentLookup()
    )
    if args.save_profile:
        custom = {k: v for k, v in overrides.items() if DEFAULT_CONTINENT_OVERRIDES.get(k) != v}
        ColumnProfile(roster_mapping, continent_mapping, custom).save(args.save_profile)
        logger.info("Saved column profile to %s", args.save_profile)

    return build_roster_graph(players, lookup, overrides)


def _fetch(args: argparse.Namespace) -> None:
    admissions_rows: list[dict[str, Any]] = []
    directory_rows: list[dict[str, Any]] = []
    with EducationDataClient(args.base_url) as client:
        for year in args.years:
            admissions_rows.extend(
                {
                    "unitid": record.institution_id,
                    "year": record.year,
                    "number_applied": record.number_applied,
                    "number_enrolled": record.number_enrolled,
                }
                for record in client.fetch_admissions(year)
            )
            directory_rows.extend(
                {
                    "unitid": record.institution_id,
                    "year": record.year,
                    "inst_name": record.institution_name,
                    "inst_control": record.institution_control.value,
                }
                for record in client.fetch_directory(year)
            )
    args.admissions_out.write_text(records_to_csv(admissions_rows), encoding="utf-8")
    args.directory_out.write_text(records_to_csv(directory_rows), encoding="utf-8")
    print(
        f"Saved {len(admissions_rows)} admissions rows to {args.admissions_out} "
        f"and {len(directory_rows)} directory rows to {args.directory_out}"
    )


def main(argv: Sequence[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "fetch":
            _fetch(args)
            return

        if args.command in {"graph", "clusters"}:
            graph = _load_graph(args)
            if args.command == "graph":
                payload: Any = {
                    "nodes": nodes_to_records(graph.nodes),
                    "edges": edges_to_records(graph.edges),
                }
            else:
                payload = cluster_records(summarize_teammate_clusters(graph.edges, graph.nodes))
            _write(payload, args)
            return

        admissions = load_admissions_csv(args.admissions)
        directory = load_directory_csv(args.directory)
        if args.command == "ratios":
            _write(ratio_chart_records(compute_ratios(admissions, directory)), args)
        else:
            series = compute_index(
                admissions,
                directory,
                args.group_by,
                args.base_year if args.base_year is not None else "earliest",
                metric=args.metric,
            )
            _write(index_chart_records(series), args)
    except (ValueError, KeyError) as exc:
        raise SystemExit(f"error: {exc}") from exc


if __name__ == "__main__":
    main()
