import pandas as pd
from pathlib import Path
from typing import Union
from pet_supplies.logger import setup_logger

logger = setup_logger('etl.extract')

PRODUCT_COLUMNS = [
    "product_id",
    "category",
    "animal",
    "size",
    "price",
    "sales",
    "rating",
    "repeat_purchase",
]


def extract_products(path: Union[str, Path]) -> pd.DataFrame:
    """
    Extract the raw pet supplies CSV and return a DataFrame.
    Normalizes column names to lowercase with underscores.
    """
    path = Path(path)
    if not path.is_file():
        logger.error(f"Products file not found: {path}")
        raise FileNotFoundError(f"Products file not found: {path}")

    logger.info(f"Extracting products from {path}")
    # Every column is read as text; each cleaning rule parses its own column
    products_df = pd.read_csv(path, dtype=str)
    logger.info(f"Successfully extracted {len(products_df)} rows from products")

    # Normalize column names: lowercase and replace spaces with underscores
    products_df.columns = products_df.columns.str.strip().str.lower().str.replace(' ', '_')
    logger.info(f"Normalized product columns: {list(products_df.columns)}")

    missing = [col for col in PRODUCT_COLUMNS if col not in products_df.columns]
    if missing:
        logger.error(f"Products file is missing columns: {missing}")
        raise ValueError(f"Products file is missing required columns: {missing}")

    return products_df
