"""
Runs the cleaning stages end to end without a scheduler.

Data Flow:
1. Extract: Load the raw pet supplies CSV
2. Validate: Drop rows without a usable product_id
3. Transform: Deduplicate, clean each column, rejoin on product_id
4. Validate: Final quality checks on the cleaned table
5. Load: Write the cleaned CSV
6. Visualize: Bar chart of repeat_purchase counts
"""

from pathlib import Path
from typing import Any, Optional, Union

import pandas as pd

from pet_supplies.analysis.repeat_purchase_chart import plot_repeat_purchase
from pet_supplies.config import PROJECT_ROOT, load_config
from pet_supplies.etl.extract import extract_products
from pet_supplies.etl.load_csv import write_products_clean_csv
from pet_supplies.etl.transform import clean_products
from pet_supplies.logger import setup_logger
from pet_supplies.utils.paths import build_clean_path, build_raw_path
from pet_supplies.validations.validate_inputs import validate_products
from pet_supplies.validations.validate_outputs import validate_products_clean

logger = setup_logger("pipeline")


def resolve_paths(config: dict[str, Any], base_dir: Optional[Union[str, Path]] = None) -> dict[str, Path]:
    """Build the raw, cleansed and chart paths named in the config."""
    base_dir = PROJECT_ROOT if base_dir is None else Path(base_dir)
    data_cfg = config["data"]
    chart_cfg = config.get("chart") or {}

    return {
        "raw": build_raw_path(data_cfg["raw_folder"], data_cfg["products_key"], base_dir),
        "clean": build_clean_path(data_cfg["cleansed_folder"], data_cfg["products_clean_key"], base_dir),
        "chart": build_clean_path(
            data_cfg["cleansed_folder"],
            chart_cfg.get("key", "repeat_purchase_counts.png"),
            base_dir,
        ),
    }


def run_pipeline(
    config: Optional[dict[str, Any]] = None,
    base_dir: Optional[Union[str, Path]] = None,
) -> pd.DataFrame:
    """
    Clean the raw products file and write the result.
    Returns the cleaned DataFrame.
    """
    config = config or load_config()
    paths = resolve_paths(config, base_dir)
    chart_cfg = config.get("chart") or {}

    raw_df = extract_products(paths["raw"])
    logger.info(f"✓ Extracted {len(raw_df)} product records")

    valid_df, input_dropped = validate_products(raw_df)
    logger.info(f"✓ Input validation: {len(valid_df)} valid ({input_dropped} issues)")

    cleaned_df = clean_products(valid_df)
    logger.info(f"✓ Cleaning completed: {len(cleaned_df)} records")

    clean_df, output_dropped = validate_products_clean(cleaned_df)
    if output_dropped > 0:
        logger.warning(f"  ⚠ {output_dropped} rows failed validation and were excluded")

    write_products_clean_csv(clean_df, paths["clean"])

    if chart_cfg.get("enabled", True):
        plot_repeat_purchase(
            clean_df,
            paths["chart"],
            title=chart_cfg.get("title"),
            dpi=chart_cfg.get("dpi", 100),
        )
    else:
        logger.info("Chart skipped (chart.enabled = false)")

    logger.info(f"✓ Pipeline SUCCESS: {len(clean_df)} records written to {paths['clean']}")
    return clean_df
