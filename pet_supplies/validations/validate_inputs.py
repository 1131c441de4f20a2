import pandas as pd
from pandera.errors import SchemaErrors
from .input_schemas import products_schema
from pet_supplies.logger import setup_logger

logger = setup_logger('validation.input')

# Non-negative whole numbers; 18 digits always fit in int64
PRODUCT_ID_PATTERN = r"\d{1,18}(\.0*)?"


def parse_product_ids(ids: pd.Series) -> pd.Series:
    """
    Parse product ids to nullable Int64 without a float round trip.

    "12", 12 and 12.0 all give 12. Blank, negative, fractional, non-numeric
    and oversized ids become <NA>.
    """
    text = ids.astype("string").str.strip()
    is_integral = text.str.fullmatch(PRODUCT_ID_PATTERN).fillna(False).astype(bool)
    digits = text.where(is_integral).str.replace(r"\.0*$", "", regex=True)
    return digits.astype(object).map(int, na_action="ignore").astype("Int64")


def validate_products(df):
    logger.info(f"Starting products validation on {len(df)} rows")

    # Rows that cannot be keyed are dropped one by one before the schema runs
    dropped = 0
    if "product_id" in df.columns:
        df = df.assign(product_id=parse_product_ids(df["product_id"]))
        unkeyed = df["product_id"].isna()
        dropped = int(unkeyed.sum())
        if dropped > 0:
            logger.warning(f"Products validation: Removed {dropped} rows without a usable product_id")
            df = df[~unkeyed]

    try:
        validated_df = products_schema.validate(df, lazy=True)
        logger.info(f"Products validation passed: {len(validated_df)} rows remaining")
        return validated_df, dropped

    except SchemaErrors as err:
        # Anything left is structural (a missing column), not a bad row
        failed = err.failure_cases
        logger.error(f"Products validation failed: {len(failed)} issues")
        logger.error(f"Errors summary:\n{failed.groupby(['column', 'check']).size()}")
        raise ValueError(
            f"Products table does not match the input schema ({len(failed)} issues)"
        ) from err
