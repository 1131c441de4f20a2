from pathlib import Path
from typing import Optional, Union

import matplotlib

matplotlib.use("Agg")  # headless: charts are only ever written to disk

import matplotlib.pyplot as plt
import pandas as pd

from pet_supplies.etl.transform import REPEAT_PURCHASE_VALUES
from pet_supplies.logger import setup_logger

logger = setup_logger("analysis.chart")

BAR_LABELS = {0: "No repeat purchase", 1: "Repeat purchase"}
BAR_COLORS = ["#9e9e9e", "#2e7d32"]


def repeat_purchase_counts(df: pd.DataFrame) -> pd.Series:
    """
    Count products per repeat_purchase value.

    Always indexed 0 then 1, with 0 for a value that never occurs.
    """
    counts = (
        df["repeat_purchase"]
        .value_counts()
        .reindex(REPEAT_PURCHASE_VALUES, fill_value=0)
        .astype("int64")
    )
    counts.index.name = "repeat_purchase"
    counts.name = "count"
    return counts


def plot_repeat_purchase(
    df: pd.DataFrame,
    output_path: Union[str, Path],
    title: Optional[str] = None,
    dpi: int = 100,
) -> Path:
    """
    Save a bar chart of repeat_purchase counts, each bar labelled with its count.
    """
    output_path = Path(output_path)
    counts = repeat_purchase_counts(df)
    logger.info(f"Plotting repeat_purchase counts: {counts.to_dict()}")

    fig, ax = plt.subplots(figsize=(6, 4))
    try:
        bars = ax.bar(
            [BAR_LABELS[value] for value in counts.index],
            counts.values,
            color=BAR_COLORS,
        )
        ax.bar_label(bars, labels=[str(count) for count in counts.values])
        ax.set_title(title or "Repeat purchases")
        ax.set_xlabel("repeat_purchase")
        ax.set_ylabel("Number of products")

        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output_path, dpi=dpi, bbox_inches="tight")
    finally:
        plt.close(fig)

    logger.info(f"Chart saved to {output_path}")
    return output_path
