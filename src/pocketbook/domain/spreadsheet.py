"""Spreadsheet import/export.

Rows are plain mappings of column name to cell value, so the mapping works
the same for CSV files and for rows handed over by any other reader.

Two import layouts are accepted:

- ``Fecha, Descripcion, Ingreso, Egreso``: each non-zero amount column
  becomes its own transaction, so one row can yield an income and an expense.
- ``Fecha, Descripcion, Monto``: positive amounts are income, negative ones
  expense.

Exports write dates as YYYY-MM-DD and amounts with two decimals, so both
survive a round trip through import unchanged.
"""

import csv
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

import structlog

from pocketbook.database.base import Database
from pocketbook.domain.balance import pending_debt_total, total_expense, total_income
from pocketbook.domain.entities import Debt, DebtStatus, Transaction, TransactionType
from pocketbook.domain.errors import ValidationError
from pocketbook.domain.results import CommandResult, command
from pocketbook.domain.transaction import TransactionService
from pocketbook.utils.amount_parser import ZERO, parse_amount, quantize_amount
from pocketbook.utils.date_parser import parse_date, start_of_day

logger = structlog.get_logger(__name__)

IMPORT_CATEGORY = "Importado"
TOTALS_LABEL = "Totales"
EXPORT_HEADERS = ["Fecha", "Descripcion", "Ingreso", "Egreso", "Ahorro", "Deuda", "Neto"]

# Accented spellings are accepted on import
COLUMN_ALIASES = {"Descripción": "Descripcion"}


@dataclass(frozen=True)
class ImportedRow:
    """One transaction read from a spreadsheet row."""

    type: TransactionType
    amount: Decimal
    description: str
    date: date


def _normalize_row(row: Mapping[str, Any]) -> dict[str, Any]:
    normalized = {}
    for key, value in row.items():
        if key is None:
            continue
        name = str(key).strip()
        normalized[COLUMN_ALIASES.get(name, name)] = value
    return normalized


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _cell_amount(value: Any) -> Decimal:
    """Amount in a cell; blank cells count as zero."""
    if _is_blank(value):
        return ZERO
    if isinstance(value, (int, float, Decimal)):
        return quantize_amount(value)
    return parse_amount(str(value))


def _cell_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if _is_blank(value):
        raise ValueError("Missing date")
    text = str(value).strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        # Spreadsheets from the bank use day/month/year
        return parse_date(text, dayfirst=True)


def map_row(row: Mapping[str, Any]) -> list[ImportedRow]:
    """Turn one spreadsheet row into zero, one or two transactions.

    Blank rows and the totals row of an export produce nothing.

    Raises:
        ValueError: If the date or an amount cannot be read
    """
    row = _normalize_row(row)
    if all(_is_blank(v) for v in row.values()):
        return []
    if str(row.get("Fecha", "")).strip() == TOTALS_LABEL:
        return []

    txn_date = _cell_date(row.get("Fecha"))
    description = str(row.get("Descripcion") or "").strip()

    if "Monto" in row and not _is_blank(row["Monto"]):
        amount = _cell_amount(row["Monto"])
        if amount == ZERO:
            raise ValueError("Amount is zero")
        txn_type = TransactionType.INCOME if amount > ZERO else TransactionType.EXPENSE
        return [ImportedRow(txn_type, abs(amount), description, txn_date)]

    mapped = []
    for column, txn_type in (("Ingreso", TransactionType.INCOME), ("Egreso", TransactionType.EXPENSE)):
        amount = _cell_amount(row.get(column))
        if amount < ZERO:
            raise ValueError(f"{column} cannot be negative: {amount}")
        if amount > ZERO:
            mapped.append(ImportedRow(txn_type, amount, description, txn_date))
    return mapped


def check_columns(columns: Iterable[str]) -> None:
    """Reject headers that match neither import layout.

    Raises:
        ValidationError: If required columns are missing
    """
    present = {COLUMN_ALIASES.get(c.strip(), c.strip()) for c in columns if c}
    missing = []
    if "Fecha" not in present:
        missing.append("Fecha")
    if "Monto" not in present and not ({"Ingreso", "Egreso"} & present):
        missing.append("Monto or Ingreso/Egreso")
    if missing:
        raise ValidationError(f"Spreadsheet is missing required columns: {', '.join(missing)}")


def _money(amount: Decimal) -> str:
    return f"{amount:.2f}"


def _pocket_movement(txn: Transaction) -> Optional[Decimal]:
    """Amount moved into savings by a pocket transfer (negative when returned)."""
    if txn.type != TransactionType.TRANSFER:
        return None
    if txn.account_id is not None and txn.destination_account_id is None:
        return txn.amount
    if txn.account_id is None and txn.destination_account_id is not None:
        return -txn.amount
    return None


def build_export_rows(transactions: Iterable[Transaction], debts: Iterable[Debt]) -> list[list[str]]:
    """Columnar export: header, one row per record, blank row, totals row.

    Income and expense go in their own columns, pocket transfers in
    ``Ahorro``, pending debts in ``Deuda``. ``Neto`` is income minus expense
    per row, and income minus expense minus pending debt on the totals row.
    """
    transactions = sorted(transactions, key=lambda t: (t.created_at, t.id))
    pending = [d for d in debts if d.status == DebtStatus.PENDING]
    rows = [list(EXPORT_HEADERS)]
    savings = ZERO

    for txn in transactions:
        day = txn.created_at.date().isoformat()
        if txn.type == TransactionType.INCOME:
            rows.append([day, txn.description or "", _money(txn.amount), "", "", "", _money(txn.amount)])
        elif txn.type == TransactionType.EXPENSE:
            rows.append([day, txn.description or "", "", _money(txn.amount), "", "", _money(-txn.amount)])
        else:
            moved = _pocket_movement(txn)
            if moved is not None:
                savings += moved
                rows.append([day, txn.description or "", "", "", _money(moved), "", ""])

    for debt in sorted(pending, key=lambda d: (d.created_at, d.id)):
        rows.append(
            [
                debt.created_at.date().isoformat(),
                debt.reason,
                "",
                "",
                "",
                _money(debt.total_amount),
                _money(-debt.total_amount),
            ]
        )

    income = total_income(transactions)
    expense = total_expense(transactions)
    debt_total = pending_debt_total(pending)
    rows.append([])
    rows.append(
        [
            TOTALS_LABEL,
            "",
            _money(income),
            _money(expense),
            _money(savings),
            _money(debt_total),
            _money(income - expense - debt_total),
        ]
    )
    return rows


class SpreadsheetService:
    """Service importing and exporting spreadsheet data."""

    def __init__(self, db: Database, user_id: str):
        """Initialize spreadsheet service.

        Args:
            db: Database instance
            user_id: Owner of the records
        """
        self.db = db
        self.user_id = user_id
        self.transaction_service = TransactionService(db, user_id)

    @command
    def import_rows(
        self, rows: Iterable[Mapping[str, Any]], account_id: Optional[int] = None
    ) -> CommandResult:
        """Import transactions from spreadsheet rows.

        Rows that cannot be read are skipped and reported; the rest are
        imported.

        Args:
            rows: Row mappings (first data row is reported as row 2)
            account_id: Optional account the transactions belong to

        Returns:
            Result whose value is a dict with ``imported`` (count),
            ``transaction_ids`` and ``errors`` (messages)
        """
        imported_ids: list[int] = []
        errors: list[str] = []

        for row_num, row in enumerate(rows, start=2):  # header is row 1
            try:
                mapped = map_row(row)
            except ValueError as e:
                errors.append(f"Row {row_num}: {e}")
                continue

            for item in mapped:
                result = self.transaction_service.create_transaction(
                    type=item.type,
                    amount=item.amount,
                    description=item.description or IMPORT_CATEGORY,
                    category=IMPORT_CATEGORY,
                    account_id=account_id,
                    created_at=start_of_day(item.date),
                )
                if result.ok:
                    imported_ids.append(result.value)
                else:
                    errors.append(f"Row {row_num}: {result.message}")

        logger.info(
            "spreadsheet_imported",
            user_id=self.user_id,
            imported=len(imported_ids),
            errors=len(errors),
        )
        stats = {"imported": len(imported_ids), "transaction_ids": imported_ids, "errors": errors}
        return CommandResult.success(f"{len(imported_ids)} records imported", stats)

    @command
    def import_csv(self, csv_file_path: str, account_id: Optional[int] = None) -> CommandResult:
        """Import transactions from a UTF-8 CSV file.

        Raises:
            ValidationError: If the file is missing, not UTF-8 or has
                unusable columns
        """
        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise ValidationError(f"CSV file not found: {csv_file_path}")

        try:
            with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
                sample = f.read(1024)
                f.seek(0)
                try:
                    delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t").delimiter
                except csv.Error:
                    delimiter = ","

                reader = csv.DictReader(f, delimiter=delimiter)
                if reader.fieldnames is None:
                    raise ValidationError("CSV file has no columns")
                check_columns(reader.fieldnames)
                rows = list(reader)
        except UnicodeDecodeError as e:
            raise ValidationError(
                f"CSV file is not UTF-8 encoded (byte {e.start}); save it as UTF-8 and retry"
            ) from e

        return self.import_rows(rows, account_id=account_id)

    def export_rows(self) -> list[list[str]]:
        """Export rows for everything the user has recorded."""
        return build_export_rows(
            self.db.list_transactions(self.user_id), self.db.list_debts(self.user_id)
        )

    @command
    def export_csv(self, csv_file_path: str) -> CommandResult:
        """Write the export to a CSV file.

        Returns:
            Result whose value is the number of data rows written
        """
        rows = self.export_rows()
        with open(csv_file_path, "w", encoding="utf-8", newline="") as f:
            csv.writer(f).writerows(rows)
        data_rows = len(rows) - 3  # header, blank separator, totals
        logger.info("spreadsheet_exported", user_id=self.user_id, rows=data_rows)
        return CommandResult.success(f"Exported {data_rows} rows to {csv_file_path}", data_rows)
