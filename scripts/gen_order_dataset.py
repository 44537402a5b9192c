#!/usr/bin/env python3
"""Synthetic SAP order export generator.

Generates order line uploads in the layout of the SAP "Sales Order Items"
export (business column names), as .xlsx or delimited text, for demos and
performance checks of the intake pipeline.

A share of rows is deliberately noisy: other item categories, blocked lines,
zero quantities, missing SKUs, European-formatted quantities and material
codes rendered in scientific notation.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

COLUMNS = [
    "Sales Order Number",
    "Line Item",
    "Material UCC14",
    "Order Quantity",
    "Storage Location",
    "New storage Location",
    "Item Category",
    "Order Item block",
    "Reason for Rejection",
    "Delivery Note",
    "Shipping Block",
    "Shipment Number",
]

ORIGINS = ["1000", "PT11", "PT15", "2000"]
DESTINATIONS = ["", "PT11", "PT15", "1000", "3000"]
CATEGORIES = ["ZTAN", "ZTAN", "ZTAN", "ZTAS"]


def generate_order_lines(rows: int, seed: int = 42, noise: float = 0.1) -> pd.DataFrame:
    """Generate a DataFrame of synthetic order lines.

    Args:
        rows: Number of order lines
        seed: Random seed for reproducible data
        noise: Share of rows carrying a data problem (0..1)

    Returns:
        DataFrame with COLUMNS, every cell as text
    """
    rng = np.random.default_rng(seed)

    orders = rng.integers(309_400_000, 309_499_999, rows)
    items = rng.integers(1, 40, rows) * 10
    skus = rng.integers(27_500_000_000_000, 27_899_999_999_999, rows, dtype=np.int64)
    quantities = rng.integers(1, 250, rows)

    data: dict[str, list[str]] = {
        "Sales Order Number": [str(v) for v in orders],
        "Line Item": [str(v) for v in items],
        "Material UCC14": [str(v) for v in skus],
        "Order Quantity": [str(v) for v in quantities],
        "Storage Location": rng.choice(ORIGINS, rows).tolist(),
        "New storage Location": rng.choice(DESTINATIONS, rows).tolist(),
        "Item Category": rng.choice(CATEGORIES, rows).tolist(),
        "Order Item block": [""] * rows,
        "Reason for Rejection": [""] * rows,
        "Delivery Note": [""] * rows,
        "Shipping Block": [""] * rows,
        "Shipment Number": [""] * rows,
    }

    noisy = np.flatnonzero(rng.random(rows) < noise)
    for n, idx in enumerate(noisy):
        kind = n % 5
        if kind == 0:
            data["Order Quantity"][idx] = "0"
        elif kind == 1:
            data["Material UCC14"][idx] = ""
        elif kind == 2:
            data["Shipping Block"][idx] = "Z1"
        elif kind == 3:
            # European thousands / decimal separators
            data["Order Quantity"][idx] = f"1.{int(quantities[idx]):03d},00"
        else:
            data["Material UCC14"][idx] = f"{int(skus[idx]) / 1e13:.4f}E+13"

    return pd.DataFrame(data, columns=COLUMNS)


def write_dataset(df: pd.DataFrame, output_path: Path, sep: str = ",") -> None:
    """Write the dataset as .xlsx (by extension) or delimited text."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if output_path.suffix.lower() == ".xlsx":
        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name="Sheet1", index=False)
    else:
        df.to_csv(output_path, sep=sep, index=False)

    print(f"Created order dataset: {output_path}")
    print(f"  Rows: {len(df):,}")
    print(f"  Columns: {len(df.columns)}")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate synthetic SAP order line uploads",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 5k lines as workbook
  %(prog)s orders.xlsx --rows 5000

  # Semicolon separated export with 30%% noisy rows
  %(prog)s orders.csv --sep ";" --noise 0.3
        """,
    )
    parser.add_argument("output", type=Path, help="Output file (.xlsx or delimited text)")
    parser.add_argument("--rows", type=int, default=1_000, help="Number of order lines (default: 1,000)")
    parser.add_argument("--noise", type=float, default=0.1, help="Share of noisy rows (default: 0.1)")
    parser.add_argument("--sep", default=",", help="Delimiter for text output (default: ',')")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    if not 0 <= args.noise <= 1:
        print("Error: --noise must be between 0 and 1", file=sys.stderr)
        return 1
    if args.sep not in (",", ";", "\t"):
        print("Error: --sep must be ',', ';' or a tab", file=sys.stderr)
        return 1

    try:
        write_dataset(generate_order_lines(args.rows, args.seed, args.noise), args.output, args.sep)
    except OSError as e:
        print(f"Error writing dataset: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
