"""Data handling utilities for JokerTag pipeline."""

import pandas as pd
from pathlib import Path
from typing import List
import logging

logger = logging.getLogger(__name__)

def load_joker_table(table_path: Path) -> pd.DataFrame:
    """
    Load the joker table from a CSV file.

    All columns are read as text so costs and requirements pass through
    exactly as written.

    Args:
        table_path: Path to joker CSV file

    Returns:
        DataFrame containing joker rows
    """
    try:
        df = pd.read_csv(table_path, dtype=str, keep_default_na=False)
        logger.info(f"Loaded joker table with {len(df)} rows")
        return df

    except FileNotFoundError:
        logger.error(f"Joker table file not found: {table_path}")
        raise
    except pd.errors.EmptyDataError:
        logger.error(f"Joker table file is empty: {table_path}")
        raise

def validate_card_data(df: pd.DataFrame, required_columns: List[str]) -> bool:
    """
    Validate that DataFrame contains required columns.

    Args:
        df: DataFrame to validate
        required_columns: List of required column names

    Returns:
        True if all required columns are present

    Raises:
        ValueError: If required columns are missing
    """
    missing_columns = set(required_columns) - set(df.columns)
    if missing_columns:
        raise ValueError(f"Missing required columns: {sorted(missing_columns)}")

    logger.debug("Card data validation passed")
    return True

def save_processed_data(df: pd.DataFrame, output_path: Path, index: bool = False) -> None:
    """
    Save processed DataFrame to CSV file.

    Args:
        df: DataFrame to save
        output_path: Path to save the file
        index: Whether to include row indices in output
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_path, index=index)
    logger.info(f"Saved processed data to {output_path} ({len(df)} rows)")

def parse_tags_column(tags_str) -> List[str]:
    """
    Parse a comma-joined tags cell back into a list.

    Args:
        tags_str: Cell value from a tagged table

    Returns:
        List of tag strings
    """
    if not isinstance(tags_str, str) or pd.isna(tags_str):
        return []
    return [tag.strip() for tag in tags_str.split(',') if tag.strip()]
