from functools import reduce

import numpy as np
import pandas as pd
from pet_supplies.logger import setup_logger

logger = setup_logger("etl.transform")

KEY_COLUMN = "product_id"
UNKNOWN = "Unknown"

# Fixed vocabularies for the categorical columns
CATEGORIES = ["Housing", "Food", "Toys", "Equipment", "Medicine", "Accessory"]
ANIMALS = ["Dog", "Cat", "Fish", "Bird"]
SIZES = ["Small", "Medium", "Large"]

CATEGORICAL_DOMAINS = {
    "category": CATEGORIES,
    "animal": ANIMALS,
    "size": SIZES,
}

MEDIAN_IMPUTED_COLUMNS = ["price", "sales"]

RATING_MIN = 1
RATING_MAX = 10
RATING_MISSING = 0

REPEAT_PURCHASE_VALUES = [0, 1]

FINAL_COLUMNS = [
    "product_id",
    "category",
    "animal",
    "size",
    "price",
    "sales",
    "rating",
    "repeat_purchase",
]


def deduplicate_products(products_df: pd.DataFrame) -> pd.DataFrame:
    """Keep the first occurrence of every product_id, in input order."""
    deduped_df = products_df.drop_duplicates(subset=KEY_COLUMN, keep="first")
    removed = len(products_df) - len(deduped_df)
    if removed > 0:
        logger.warning(f"Deduplication: Removed {removed} duplicate product_id rows")
    return deduped_df


def normalize_categorical(products_df: pd.DataFrame, column: str, allowed: list) -> pd.DataFrame:
    """
    Map values outside the allowed set (missing included) to "Unknown".

    Matching is exact, so "dog" or "DOG" is not the same as "Dog".
    """
    values = products_df[column]
    is_allowed = values.isin(allowed)

    unknown_count = int((~is_allowed).sum())
    if unknown_count > 0:
        logger.warning(f"{column}: {unknown_count} values mapped to '{UNKNOWN}'")

    return pd.DataFrame({
        KEY_COLUMN: products_df[KEY_COLUMN],
        column: values.where(is_allowed, UNKNOWN),
    })


def impute_median(products_df: pd.DataFrame, column: str) -> pd.DataFrame:
    """
    Fill missing numeric values with the column median, then round to 2 decimals.

    Unparseable, negative and infinite values count as missing and are left
    out of the median. Series.median interpolates linearly between the two
    middle values when the count is even.
    """
    values = pd.to_numeric(products_df[column], errors="coerce").astype("float64")
    values = values.where(np.isfinite(values) & (values >= 0))

    median = values.median()
    if pd.isna(median):
        logger.warning(f"{column}: no observed values, imputing 0.00")
        median = 0.0

    missing_count = int(values.isna().sum())
    if missing_count > 0:
        logger.warning(f"{column}: {missing_count} missing values imputed with median {median:.2f}")

    return pd.DataFrame({
        KEY_COLUMN: products_df[KEY_COLUMN],
        column: values.fillna(median).round(2).astype("float64"),
    })


def validate_rating(products_df: pd.DataFrame) -> pd.DataFrame:
    """Keep integer ratings in [1, 10]; everything else becomes 0."""
    ratings = pd.to_numeric(products_df["rating"], errors="coerce")
    is_valid = ratings.between(RATING_MIN, RATING_MAX) & (ratings % 1 == 0)

    invalid_count = int((~is_valid).sum())
    if invalid_count > 0:
        logger.warning(f"rating: {invalid_count} missing or invalid ratings set to {RATING_MISSING}")

    return pd.DataFrame({
        KEY_COLUMN: products_df[KEY_COLUMN],
        "rating": ratings.where(is_valid, RATING_MISSING).astype("int64"),
    })


def filter_repeat_purchase(products_df: pd.DataFrame) -> pd.DataFrame:
    """Drop rows whose repeat_purchase is missing or not 0/1."""
    flags = pd.to_numeric(products_df["repeat_purchase"], errors="coerce")
    is_valid = flags.isin(REPEAT_PURCHASE_VALUES)

    dropped = int((~is_valid).sum())
    if dropped > 0:
        logger.warning(f"repeat_purchase: Removed {dropped} rows with missing or invalid values")

    return pd.DataFrame({
        KEY_COLUMN: products_df.loc[is_valid, KEY_COLUMN],
        "repeat_purchase": flags[is_valid].astype("int64"),
    })


def join_cleaned_columns(frames: list[pd.DataFrame]) -> pd.DataFrame:
    """
    Inner-join per-column frames on product_id.

    Row order follows the first frame; only keys present in every frame survive.
    """
    if not frames:
        raise ValueError("No cleaned column frames to join")

    joined_df = reduce(
        lambda left, right: left.merge(right, on=KEY_COLUMN, how="inner"),
        frames,
    )
    return joined_df.reset_index(drop=True)


def clean_products(products_df: pd.DataFrame) -> pd.DataFrame:

    logger.info(f"Starting cleaning of {len(products_df)} product rows")

    # --------------------------------------------------
    # 1. Deduplicate on the key
    # --------------------------------------------------
    # Every per-column rule runs on this frame, so medians are
    # computed over unique products before any row is dropped.
    products_df = deduplicate_products(products_df)
    logger.info(f"Deduplication: {len(products_df)} unique products retained")

    # --------------------------------------------------
    # 2. Categorical columns -> allowed value or "Unknown"
    # --------------------------------------------------
    # Example: category="reptile" -> "Unknown", animal=None -> "Unknown"
    categorical_frames = [
        normalize_categorical(products_df, column, allowed)
        for column, allowed in CATEGORICAL_DOMAINS.items()
    ]

    # --------------------------------------------------
    # 3. Numeric columns -> median imputation, 2 decimals
    # --------------------------------------------------
    # Example: prices [10, None, 30, 40] -> median 30 -> [10.0, 30.0, 30.0, 40.0]
    numeric_frames = [impute_median(products_df, column) for column in MEDIAN_IMPUTED_COLUMNS]

    # --------------------------------------------------
    # 4. Rating -> integer 1..10 or 0 sentinel
    # --------------------------------------------------
    rating_frame = validate_rating(products_df)

    # --------------------------------------------------
    # 5. Repeat purchase -> drop rows without a 0/1 flag
    # --------------------------------------------------
    # The only rule that removes rows; the join below carries
    # the removal into the final table.
    repeat_frame = filter_repeat_purchase(products_df)
    logger.info(f"Repeat purchase filter: {len(repeat_frame)} rows retained")

    # --------------------------------------------------
    # 6. Reassemble on product_id
    # --------------------------------------------------
    cleaned_df = join_cleaned_columns(
        categorical_frames + numeric_frames + [rating_frame, repeat_frame]
    )

    # --------------------------------------------------
    # 7. Type casting and final column order
    # --------------------------------------------------
    cleaned_df[KEY_COLUMN] = cleaned_df[KEY_COLUMN].astype("int64")
    final_df = cleaned_df[FINAL_COLUMNS]
    logger.info(f"Cleaning completed: {len(final_df)} records ready for output")

    return final_df
