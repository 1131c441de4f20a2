from pandera.pandas import Check, Column, DataFrameSchema


products_schema = DataFrameSchema(
    {
        # Identifier: parsed to Int64 by validate_products before this schema runs
        "product_id": Column("Int64", Check.ge(0), nullable=False),

        # Categorical attributes (free text from source, normalized in transform)
        "category": Column(nullable=True),
        "animal": Column(nullable=True),
        "size": Column(nullable=True),

        # Measures (may hold blanks or text like "unlisted")
        "price": Column(nullable=True),
        "sales": Column(nullable=True),
        "rating": Column(nullable=True),

        # Flag (invalid values are dropped in transform, not here)
        "repeat_purchase": Column(nullable=True),
    },
    strict=False  # Allow extra columns (will be dropped during transform)
)
