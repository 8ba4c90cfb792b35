from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Sequence

from src.adapters.persistence import JsonCatalogueRepository, LocalSnapshotRepository
from src.app.services.routing_service import RoutingService
from src.domain.exceptions import TransportError, UnknownStopError
from src.domain.models import BusItem, Itinerary


def _itinerary_to_dict(itinerary: Itinerary) -> dict:
    items = []
    for item in itinerary.items:
        if isinstance(item, BusItem):
            items.append(
                {
                    "type": item.type.value,
                    "bus": item.bus,
                    "span_count": item.span_count,
                    "time": item.time,
                }
            )
        else:
            items.append(
                {
                    "type": item.type.value,
                    "stop_name": item.stop_name,
                    "time": item.time,
                }
            )
    return {"total_time": itinerary.total_time, "items": items}


def _make_base(args: argparse.Namespace) -> int:
    catalogue_repository = JsonCatalogueRepository(path=args.catalogue)
    source = catalogue_repository.load_catalogue()
    out = args.out or source.snapshot_path or os.getenv("SNAPSHOT_PATH")
    if not out:
        print(
            "No snapshot path: pass --out or set serialization_settings.file",
            file=sys.stderr,
        )
        return 2

    service = RoutingService(
        snapshot_repository=LocalSnapshotRepository(path=out),
        catalogue_repository=catalogue_repository,
    )
    router = service.make_base()
    print(
        f"Snapshot written to {out}: {router.graph.vertex_count} stops, "
        f"{router.graph.edge_count} edges"
    )
    return 0


def _route(args: argparse.Namespace) -> int:
    service = RoutingService(
        snapshot_repository=LocalSnapshotRepository(path=args.snapshot)
    )
    service.restore()

    try:
        itinerary = service.find_route(from_stop=args.from_stop, to_stop=args.to_stop)
    except UnknownStopError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    if itinerary is None:
        print(json.dumps({"error_message": "not found"}))
    else:
        print(json.dumps(_itinerary_to_dict(itinerary), ensure_ascii=False, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="transit-router")
    parser.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "INFO"))
    sub = parser.add_subparsers(dest="command", required=True)

    make_base = sub.add_parser(
        "make-base", help="Build and persist the routing snapshot"
    )
    make_base.add_argument("catalogue", help="Catalogue JSON document")
    make_base.add_argument("--out", help="Snapshot file (overrides the document)")
    make_base.set_defaults(handler=_make_base)

    route = sub.add_parser(
        "route", help="Find the fastest itinerary between two stops"
    )
    route.add_argument("snapshot")
    route.add_argument("from_stop")
    route.add_argument("to_stop")
    route.set_defaults(handler=_route)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.handler(args)
    except TransportError as exc:
        logging.getLogger(__name__).error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
