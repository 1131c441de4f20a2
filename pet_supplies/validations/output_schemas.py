import numpy as np
from pandera.pandas import Check, Column, DataFrameSchema

from pet_supplies.etl.transform import (
    ANIMALS,
    CATEGORIES,
    RATING_MAX,
    RATING_MISSING,
    REPEAT_PURCHASE_VALUES,
    SIZES,
    UNKNOWN,
)


def _two_decimals():
    return Check(lambda s: s.round(2) == s, name="two_decimals", error="more than 2 decimal places")


def _finite():
    return Check(lambda s: np.isfinite(s), name="finite", error="infinite value")


products_clean_schema = DataFrameSchema(
    {
        # Identifier
        "product_id": Column(int, nullable=False, unique=True),

        # Dimensions
        "category": Column(str, Check.isin(CATEGORIES + [UNKNOWN]), nullable=False),
        "animal": Column(str, Check.isin(ANIMALS + [UNKNOWN]), nullable=False),
        "size": Column(str, Check.isin(SIZES + [UNKNOWN]), nullable=False),

        # Measures
        "price": Column(float, [Check.ge(0), _finite(), _two_decimals()], nullable=False),
        "sales": Column(float, [Check.ge(0), _finite(), _two_decimals()], nullable=False),

        # Rating: 0 marks a missing rating
        "rating": Column(int, Check.between(RATING_MISSING, RATING_MAX), nullable=False),

        # Flag
        "repeat_purchase": Column(int, Check.isin(REPEAT_PURCHASE_VALUES), nullable=False),
    },
    strict=True,
    ordered=True,
)
