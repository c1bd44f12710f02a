# -*- coding: utf-8 -*-
"""
Pipeline Orchestrator — Entry point for running the project.
==============================================================

Orchestrates the stages of the DPE Corse aggregation:
    1. aggregate — Load the five CSV extracts, summarize each file,
                   merge into the global result and write it as JSON
    2. fallback  — Write the precomputed fallback dataset as JSON
    3. list      — List the registered source files and the DPE class legend

CLI usage:
    python -m src.pipeline aggregate
    python -m src.pipeline aggregate --data-dir data/raw/dpe
    python -m src.pipeline aggregate --base-url https://host/data/
    python -m src.pipeline aggregate --sources logements_neufs,tertiaire_depuis_2021
    python -m src.pipeline aggregate --fallback     # fallback if nothing loads
    python -m src.pipeline fallback
    python -m src.pipeline list

Extensibility:
    To add a new stage to the pipeline:
    1. Create a run_xxx() function below
    2. Register it in the argparse choices and the dispatch in main()
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from config.settings import ProjectConfig, config
from src.collectors.dpe_files import DpeFileLoader
from src.data.fallback import load_fallback
from src.processing.dpe_classes import DPE_CLASSES
from src.processing.errors import NoUsableDataError
from src.processing.registry import all_specs


def setup_logging(level: str = "INFO") -> None:
    """Configure global logging for the pipeline.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR).
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(name)-25s | %(levelname)-8s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def write_json(payload: Dict[str, Any], path: Path) -> Path:
    """Write a JSON payload (UTF-8, indented), creating parent directories.

    Args:
        payload: JSON-serializable dictionary.
        path: Destination file.

    Returns:
        The path written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
    return path


def build_config(
    data_dir: Optional[str] = None,
    base_url: Optional[str] = None,
    base: ProjectConfig = config,
) -> ProjectConfig:
    """Apply CLI overrides on top of the environment configuration."""
    source = base.source
    if data_dir:
        source = replace(source, data_dir=Path(data_dir), base_url=None)
    if base_url:
        source = replace(source, base_url=base_url)
    return replace(base, source=source)


def run_aggregate(
    project_config: ProjectConfig = config,
    sources: Optional[List[str]] = None,
    output: Optional[Path] = None,
    use_fallback: bool = False,
) -> int:
    """Load, summarize and aggregate the DPE files, then write the JSON result.

    Partial failures (some files missing or malformed) are logged and the
    run proceeds with the files that loaded. If no file loads, the run
    fails, unless `use_fallback` is set, in which case the precomputed
    fallback dataset is written instead.

    Args:
        project_config: Configuration (source location, thresholds).
        sources: Registry keys to load. If None, load all five files.
        output: Destination JSON file (default: config.output_path).
        use_fallback: Write the fallback dataset when no file loads.

    Returns:
        Process exit code (0 on success, 1 if no data could be produced).
    """
    logger = logging.getLogger("pipeline")
    output = output or project_config.output_path

    try:
        with DpeFileLoader(project_config) as loader:
            result = loader.load_and_aggregate(sources)
    except NoUsableDataError as exc:
        if not use_fallback:
            logger.error("Aggregation failed: %s", exc)
            logger.error("Check the data files, then rerun the full load.")
            return 1
        logger.warning("No data file loaded: writing the fallback dataset instead.")
        write_json(load_fallback(), output)
        logger.info("Fallback dataset → %s", output)
        return 0

    write_json(result.to_dict(), output)
    logger.info(
        "Résultat agrégé : %d DPE, %d fichiers → %s",
        result.total_dpe, len(result.files), output,
    )
    return 0


def run_fallback(output: Path) -> None:
    """Write the precomputed fallback dataset as JSON."""
    logger = logging.getLogger("pipeline")
    write_json(load_fallback(), output)
    logger.info("Fallback dataset → %s", output)


def run_list() -> None:
    """List registered source files and the DPE class legend."""
    print("\nRegistered DPE source files:")
    print("-" * 60)
    for spec in all_specs():
        print(f"  {spec.key:<32} → {spec.category:<9} {spec.period:<11} {spec.filename}")

    print("\nDPE classes:")
    print("-" * 60)
    for dpe_class in DPE_CLASSES:
        print(
            f"  {dpe_class.value}  {dpe_class.label:<20} "
            f"{dpe_class.consumption_range:>9} kWh/m².an  "
            f"{dpe_class.ges_range:>7} kgCO2/m².an"
        )
    print()


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for the pipeline."""
    parser = argparse.ArgumentParser(
        description="DPE Corse — Aggregation pipeline",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m src.pipeline aggregate                          # All five files
  python -m src.pipeline aggregate --data-dir data/raw/dpe  # Other directory
  python -m src.pipeline aggregate --base-url https://host/data/
  python -m src.pipeline aggregate --sources logements_neufs
  python -m src.pipeline aggregate --fallback               # Fallback if nothing loads
  python -m src.pipeline fallback                           # Write fallback dataset
  python -m src.pipeline list                               # List source files
        """,
    )

    parser.add_argument(
        "stage",
        choices=["aggregate", "fallback", "list"],
        help="Pipeline stage to execute",
    )
    parser.add_argument(
        "--sources",
        type=str,
        default=None,
        help="Source files to load (comma-separated registry keys). "
             "Ex: logements_neufs,tertiaire_depuis_2021",
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        default=None,
        help="Directory containing the CSV extracts",
    )
    parser.add_argument(
        "--base-url",
        type=str,
        default=None,
        help="Base URL to download the CSV extracts from",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output JSON file (default: data/processed/dpe_corse_aggregate.json)",
    )
    parser.add_argument(
        "--fallback",
        action="store_true",
        help="Write the precomputed dataset if no file can be loaded",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=config.log_level.upper(),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    args = parser.parse_args(argv)

    # Configure logging
    setup_logging(args.log_level)
    logger = logging.getLogger("pipeline")

    logger.info("=" * 60)
    logger.info("  DPE Corse — Pipeline")
    logger.info("  Stage: %s", args.stage)
    logger.info("=" * 60)

    project_config = build_config(args.data_dir, args.base_url)
    output = Path(args.output) if args.output else project_config.output_path

    exit_code = 0
    if args.stage == "aggregate":
        sources = args.sources.split(",") if args.sources else None
        exit_code = run_aggregate(
            project_config, sources=sources, output=output,
            use_fallback=args.fallback,
        )

    elif args.stage == "fallback":
        run_fallback(output)

    elif args.stage == "list":
        run_list()

    logger.info("Pipeline complete.")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
