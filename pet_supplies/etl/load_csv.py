import pandas as pd
from pathlib import Path
from typing import Union
from pet_supplies.logger import setup_logger

logger = setup_logger("etl.load")

# price and sales always carry two decimals in the output file
FLOAT_FORMAT = "%.2f"


def write_products_clean_csv(
    df: pd.DataFrame,
    path: Union[str, Path],
) -> Path:
    """
    Write the validated products dataframe to a local CSV file.
    An empty dataframe is written as a header-only file.
    """
    path = Path(path)
    logger.info(f"Writing {len(df)} records to {path}")

    try:
        if path.name == "":
            raise ValueError("Output path must name a file")

        if df.empty:
            logger.warning("No cleaned records to write - output will contain only the header")

        df = df.copy()

        # Type conversions for CSV output
        df["product_id"] = df["product_id"].astype("int64")
        df["rating"] = df["rating"].astype("int64")
        df["repeat_purchase"] = df["repeat_purchase"].astype("int64")

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            df.to_csv(path, index=False, float_format=FLOAT_FORMAT)
        except PermissionError as e:
            logger.error(f"Permission denied writing to '{path}'")
            raise PermissionError(
                f"Permission denied writing cleaned products to '{path}'. "
                "Check the cleansed folder permissions."
            ) from e

        logger.info(f"Successfully written cleaned products to {path}")
        return path

    except (ValueError, PermissionError) as e:
        logger.error(f"Validation/Permission error: {str(e)}")
        raise

    except Exception as e:
        logger.error(f"Unexpected error writing CSV: {str(e)}", exc_info=True)
        raise RuntimeError(
            f"Failed to write cleaned products to {path}: {str(e)}"
        ) from e
