from datetime import datetime, timedelta
from airflow.decorators import dag, task
from airflow.exceptions import AirflowException
from typing import Any

from pet_supplies.config import load_config
from pet_supplies.logger import setup_logger
from pet_supplies.pipeline import resolve_paths

# Load config
config = load_config()
PATHS = resolve_paths(config)
CHART_CONFIG = config.get("chart") or {}

RAW_PATH = str(PATHS["raw"])
CLEAN_PATH = str(PATHS["clean"])
CHART_PATH = str(PATHS["chart"])

# Default arguments for DAG
DEFAULT_ARGS = {
    "owner": "data-engineering",
    "email_on_failure": False,
    "email_on_retry": False,
    "retries": 1,
    "retry_delay": timedelta(minutes=5),
    "execution_timeout": timedelta(minutes=30),
}


@dag(
    dag_id="pet_supplies_etl",
    description="""
    Pet Supplies Cleaning Pipeline - Cleans the pet supplies product table
    column by column and writes the rejoined table as CSV.

    Data Flow:
    1. Extract: Load the raw products CSV
    2. Validate: Drop rows without a usable product_id (Pandera)
    3. Transform: Deduplicate, normalize categoricals, impute medians,
       validate ratings, filter repeat_purchase, inner join
    4. Validate: Final quality checks before writing
    5. Load: Write the cleaned CSV
    6. Visualize: Repeat purchase bar chart
    """,
    start_date=datetime(2026, 1, 1),
    schedule=None,
    catchup=False,
    max_active_runs=1,
    default_args=DEFAULT_ARGS,
    tags=["pet-supplies", "etl", "cleaning"],
)
def pet_supplies_etl():
    """
    Pet Supplies Cleaning DAG

    Runs the same stages as pet_supplies.pipeline.run_pipeline, one task per stage.
    """
    from pet_supplies.etl.extract import extract_products
    from pet_supplies.validations.validate_inputs import validate_products
    from pet_supplies.etl.transform import clean_products
    from pet_supplies.validations.validate_outputs import validate_products_clean
    from pet_supplies.etl.load_csv import write_products_clean_csv
    from pet_supplies.analysis.repeat_purchase_chart import plot_repeat_purchase

    logger = setup_logger("dags.pet_supplies_etl")

    @task(
        task_id="extract_raw_products",
        doc_md=f"""
        Extracts the raw products table from `{RAW_PATH}`.

        **Column Normalization:**
        - Converts all column names to lowercase
        - Replaces spaces with underscores
        """,
    )
    def extract():
        """Extract products from the raw CSV"""
        try:
            products_df = extract_products(RAW_PATH)
            logger.info(f"✓ Extracted {len(products_df)} product records")
            return products_df
        except Exception as e:
            logger.error(f"✗ Extraction failed: {str(e)}")
            raise AirflowException(f"Data extraction failed: {str(e)}")

    @task(
        task_id="validate_input_data",
        doc_md="""
        Validates raw products against the input schema.

        **Quality Checks:**
        - All product columns present
        - product_id: Non-null integer

        **Action:**
        - Removes rows that cannot be keyed
        - An empty result carries on to a header-only output
        """,
    )
    def validate_inputs(products_df: Any):
        """Validate input data quality"""
        clean_products_df, dropped = validate_products(products_df)
        logger.info(f"  - Products: {len(clean_products_df)} valid ({dropped} issues)")

        if clean_products_df.empty:
            logger.warning("  ⚠ No keyed products left, the cleaned output will be header-only")

        return clean_products_df

    @task(
        task_id="clean_products",
        doc_md="""
        Cleans each column and rejoins on product_id.

        **Transformations:**
        1. Keep first row per product_id
        2. category / animal / size outside their vocabulary -> "Unknown"
        3. price / sales: median imputation, 2 decimals
        4. rating: integer 1-10 or 0
        5. Drop rows with missing/invalid repeat_purchase
        6. Inner join on product_id
        """,
    )
    def transform(products_df: Any):
        """Clean products"""
        try:
            cleaned_df = clean_products(products_df)
            logger.info(f"✓ Cleaning completed: {len(cleaned_df)} records")
            return cleaned_df
        except Exception as e:
            logger.error(f"✗ Cleaning failed: {str(e)}")
            raise AirflowException(f"Data cleaning failed: {str(e)}")

    @task(
        task_id="validate_and_write_clean_data",
        doc_md=f"""
        Final validation, then writes the cleaned table.

        **Final Quality Checks:**
        - Unique product_id
        - Categorical values within vocabulary or "Unknown"
        - Non-negative price and sales with 2 decimals
        - rating in [0, 10], repeat_purchase in {{0, 1}}

        **Output Location:**
        - `{CLEAN_PATH}`
        """,
    )
    def validate_and_load(cleaned_df):
        """Validate output and write CSV"""
        try:
            clean_df, dropped = validate_products_clean(cleaned_df)
            if dropped > 0:
                logger.warning(f"  ⚠ {dropped} rows failed validation and were excluded")

            write_products_clean_csv(clean_df, CLEAN_PATH)
            logger.info(f"✓ Pipeline SUCCESS: {len(clean_df)} records written")
            return clean_df

        except Exception as e:
            logger.error(f"✗ Validation/Write failed: {str(e)}")
            raise AirflowException(f"Pipeline failed at final stage: {str(e)}")

    @task(task_id="plot_repeat_purchase")
    def plot(clean_df):
        """Draw the repeat purchase bar chart"""
        if not CHART_CONFIG.get("enabled", True):
            logger.info("Chart skipped (chart.enabled = false)")
            return "Chart skipped"

        plot_repeat_purchase(
            clean_df,
            CHART_PATH,
            title=CHART_CONFIG.get("title"),
            dpi=CHART_CONFIG.get("dpi", 100),
        )
        return CHART_PATH

    raw = extract()
    validated = validate_inputs(raw)
    cleaned = transform(validated)
    written = validate_and_load(cleaned)
    plot(written)


pet_supplies_etl()
