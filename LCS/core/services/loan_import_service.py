"""
Loan Import Service
Spreadsheet decoding and row-to-loan mapping for uploaded loan files
"""

import io
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple
import logging

import pandas as pd

from core.models.entities import Cell, Loan, LoanStatus
from utils.date_normalizer import DateNormalizer
from utils.exceptions import SpreadsheetParseException, ValidationException
from utils.helpers import DateUtils, NumberUtils, StringUtils, LoggingUtils

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = ('.csv', '.xlsx', '.xls')

# Months from start date to maturity, keyed by lower-cased product name
PRODUCT_MATURITY_MONTHS = {
    'small enterprise': 4,
    'medium enterprise capital expenditure': 30,
    'lease financing': 30,
    'commercial product one': 18,
}


def _text(cell: Cell) -> str:
    return cell.text


def _amount(cell: Cell) -> Optional[Decimal]:
    return NumberUtils.parse_amount(cell.text)


def _amount_or_zero(cell: Cell) -> Decimal:
    amount = NumberUtils.parse_amount(cell.text)
    return amount if amount is not None else Decimal('0')


def _integer(cell: Cell) -> Optional[int]:
    return NumberUtils.parse_int(cell.text)


def _date(cell: Cell) -> Optional[str]:
    return DateNormalizer.normalize(cell.value)


# Normalized header -> (Loan attribute, converter)
HEADER_FIELDS: Dict[str, Tuple[str, Callable[[Cell], Any]]] = {
    'loanaccountnumber': ('account_number', _text),
    'accountnumber': ('account_number', _text),
    'product': ('product', _text),
    'originalamount': ('original_amount', _amount),
    'loanamount': ('original_amount', _amount),
    'term': ('term', _integer),
    'startdate': ('start_date', _date),
    'disburseddate': ('start_date', _date),
    'client': ('client', _text),
    'branch': ('branch', _text),
    'phonenumber': ('phone_number', _text),
    'totalliab': ('total_liab', _amount),
    'totalliability': ('total_liab', _amount),
    'repaymentamount': ('repayment_amount', _amount_or_zero),
    'expectedrepaymentamount': ('repayment_amount', _amount_or_zero),
    'repaymentdate': ('expected_repayment_date', _date),
    'expectedrepaymentdate': ('expected_repayment_date', _date),
    'remark': ('remark', _text),
    'interestrepaid': ('interest_repaid', _amount),
    'interestoutstanding': ('interest_outstanding', _amount),
}


@dataclass
class ImportResult:
    """Outcome of mapping spreadsheet rows to loans"""
    loans: List[Loan] = field(default_factory=list)
    skipped_rows: List[int] = field(default_factory=list)
    total_rows: int = 0

    @property
    def skipped_count(self) -> int:
        return len(self.skipped_rows)

    def summary(self) -> str:
        message = f"Parsed {len(self.loans)} loan(s) from {self.total_rows} data row(s)."
        if self.skipped_rows:
            message += f" {self.skipped_count} row(s) skipped (missing account number or invalid amount)."
        return message


def read_spreadsheet(data: bytes, filename: str) -> List[List[Cell]]:
    """Decode CSV or Excel bytes into rows of typed cells (header row first)"""
    extension = Path(filename or "").suffix.lower()
    if extension not in SUPPORTED_EXTENSIONS:
        raise SpreadsheetParseException(
            f"Unsupported file type '{extension or filename}'. Please upload a CSV or Excel file."
        )

    try:
        buffer = io.BytesIO(data)
        if extension == '.csv':
            frame = pd.read_csv(buffer, header=None, dtype=str, keep_default_na=False)
        else:
            frame = pd.read_excel(buffer, sheet_name=0, header=None, dtype=object)
    except pd.errors.EmptyDataError:
        return []
    except Exception as e:
        logger.error(f"Error reading spreadsheet {filename}: {e}")
        raise SpreadsheetParseException(f"Error processing file: {str(e)}")

    rows = []
    for record in frame.itertuples(index=False, name=None):
        rows.append([Cell.from_raw(None if _is_missing(value) else value) for value in record])
    return rows


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return False
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


class LoanImportService:
    """Maps spreadsheet rows to validated loans"""

    def import_file(self, data: bytes, filename: str, today: date = None) -> ImportResult:
        """Decode an uploaded file and import its rows"""
        rows = read_spreadsheet(data, filename)
        if len(rows) < 2:
            raise SpreadsheetParseException("The uploaded file is empty or contains no data rows.")

        result = self.import_rows(rows, today=today)
        if not result.loans:
            raise ValidationException("No valid loan data found in the file.")

        LoggingUtils.log_business_event(
            "LOANS_IMPORTED", "file", filename,
            details={'loans': len(result.loans), 'skipped': result.skipped_count},
        )
        return result

    def import_rows(self, rows: Sequence[Sequence[Any]], today: date = None) -> ImportResult:
        """Map a header row plus data rows to loans, skipping invalid rows"""
        if today is None:
            today = DateUtils.today()

        result = ImportResult()
        if not rows:
            return result

        headers = [StringUtils.normalize_header(_as_cell(h).text) for h in rows[0]]

        for offset, raw_row in enumerate(rows[1:]):
            row_number = offset + 2
            cells = [_as_cell(value) for value in raw_row]
            if all(cell.is_empty for cell in cells):
                continue

            result.total_rows += 1
            loan = self.build_loan(headers, cells, today)
            if loan is None:
                logger.warning(f"Skipping invalid loan row {row_number}: {[c.text for c in cells]}")
                result.skipped_rows.append(row_number)
                continue
            result.loans.append(loan)

        logger.info(result.summary())
        return result

    def build_loan(self, headers: List[str], cells: List[Cell], today: date) -> Optional[Loan]:
        """Build one loan from a data row; None when required fields are invalid"""
        loan = Loan(
            id=StringUtils.generate_id(),
            status=LoanStatus.OUTSTANDING,
            assigned_agent_id=None,
            original_amount=None,
        )

        for index, header in enumerate(headers):
            mapping = HEADER_FIELDS.get(header)
            if mapping is None or index >= len(cells) or cells[index].is_empty:
                continue
            attribute, convert = mapping
            setattr(loan, attribute, convert(cells[index]))

        if not loan.account_number or loan.original_amount is None or loan.original_amount <= 0:
            return None

        loan.outstanding_balance = loan.original_amount
        loan.matured_on = self.maturity_date(loan.product, loan.start_date)
        loan.pass_due_date = self.pass_due_date(loan, today)
        return loan

    @staticmethod
    def maturity_date(product: Optional[str], start_date: Optional[str]) -> Optional[str]:
        """Start date plus the product's term; None for unknown products"""
        start = DateUtils.parse_iso(start_date)
        if start is None:
            return None

        months = PRODUCT_MATURITY_MONTHS.get((product or "").strip().lower())
        if not months:
            return None
        return DateUtils.add_months(start, months).isoformat()

    @staticmethod
    def pass_due_date(loan: Loan, today: date) -> Optional[str]:
        """Expected repayment date if it has already passed with money still owed"""
        if not loan.expected_repayment_date or loan.outstanding_balance <= 0:
            return None
        if DateUtils.is_past(loan.expected_repayment_date, today):
            return loan.expected_repayment_date
        return None


def _as_cell(value: Any) -> Cell:
    return value if isinstance(value, Cell) else Cell.from_raw(value)
