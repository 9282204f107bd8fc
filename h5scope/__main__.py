from __future__ import annotations

import argparse
import json
import logging
import sys

from h5scope.config import Settings, configure_logging
from h5scope.core.exceptions import CoreError
from h5scope.core.metadata import ChannelMeta
from h5scope.io.h5_reader import H5Reader
from h5scope.io.load import load_measurement


logger = logging.getLogger(__name__)


def _inspect(args: argparse.Namespace, settings: Settings) -> dict:
    measurement = load_measurement(args.file, layout=settings.layout())
    selected = [measurement.find(args.channel)] if args.channel else list(measurement)
    channels = []
    for channel in selected:
        channels.append(
            {
                "id": channel.id,
                "name": channel.display_name,
                "unit": channel.unit,
                "attributes": channel.meta.attrs,
                "datasets": {
                    name: {
                        "shape": list(ds.shape),
                        "total_samples": ds.total_samples,
                        "columns": ds.columns,
                        "size_bytes": ds.size_bytes,
                        "decimation": ds.decimation,
                    }
                    for name, ds in channel.datasets.items()
                },
            }
        )
    return {
        "file": args.file,
        "measurement": measurement.meta.layout,
        "size_bytes": measurement.size_bytes,
        "channels": channels,
    }


def _read(args: argparse.Namespace, settings: Settings) -> dict:
    with H5Reader.from_path(args.file, layout=settings.layout(), policy=settings.policy()) as reader:
        if args.zoom is not None:
            chunk = reader.read_range(
                args.channel, args.start, args.start + args.count, args.zoom, args.max_points
            )
        else:
            chunk = reader.read(args.channel, args.dataset, args.start, args.count)
        payload = {
            "channel": chunk.channel_id,
            "dataset": chunk.dataset,
            "start": chunk.start,
            "count": chunk.n,
            "decimation": chunk.decimation,
            "first_sample": chunk.start * chunk.decimation,
            "raw": chunk.tolist(),
        }
        if args.volts:
            meta = ChannelMeta.from_attributes(reader.channel_attributes(args.channel))
            payload["volts"] = chunk.to_volts(meta).tolist()
    return payload


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="h5scope",
        description="Inspect channels and read samples from HDF5 measurement files.",
    )
    parser.add_argument("--log-level", default=None, help="Override H5SCOPE_LOG_LEVEL.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    inspect_parser = subparsers.add_parser("inspect", help="List channels, attributes and datasets.")
    inspect_parser.add_argument("file")
    inspect_parser.add_argument("--channel", help="Only this channel, by id or display name.")
    inspect_parser.set_defaults(func=_inspect)

    read_parser = subparsers.add_parser("read", help="Read a chunk of samples from one dataset.")
    read_parser.add_argument("file")
    read_parser.add_argument("channel")
    read_parser.add_argument("dataset", nargs="?", help="Dataset to read; omit when using --zoom.")
    read_parser.add_argument("--start", type=int, default=0)
    read_parser.add_argument("--count", type=int, default=100)
    read_parser.add_argument(
        "--zoom",
        type=float,
        default=None,
        help="Pick the decimation level for this zoom ratio; --start/--count are raw sample indices.",
    )
    read_parser.add_argument("--max-points", type=int, default=None, help="Cap the rows read with --zoom.")
    read_parser.add_argument("--volts", action="store_true", help="Also convert samples to volts.")
    read_parser.set_defaults(func=_read)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "read" and args.dataset is None and args.zoom is None:
        parser.error("read needs a dataset or --zoom")
    try:
        settings = Settings.from_env()
        configure_logging(args.log_level or settings.log_level)
    except CoreError as e:
        print(f"h5scope: {e}", file=sys.stderr)
        return 2

    try:
        payload = args.func(args, settings)
    except (CoreError, OSError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1

    json.dump(payload, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
