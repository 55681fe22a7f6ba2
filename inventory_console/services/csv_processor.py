import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from inventory_console.exceptions import ImportReadError, ImportRowError
from inventory_console.models.base import utcnow
from inventory_console.models.product import Product, ProductStatus
from inventory_console.schemas.import_result import ImportErrorItem, ImportResult
from inventory_console.services.category_registry import CategoryRegistry
from inventory_console.services.product_store import ProductStore, new_product_id

logger = logging.getLogger(__name__)

_datetime = TypeAdapter(datetime)

EMPTY_FILE_MESSAGE = "CSV file is empty or has only a header."
MISSING_FIELDS_MESSAGE = "Row is missing required fields: name, sku, price, stock"
INVALID_NUMBER_MESSAGE = "Invalid price or stock value."
READ_FAILED_MESSAGE = "Could not read file."


@dataclass
class ParsedImport:
    products: List[Product] = field(default_factory=list)
    errors: List[ImportRowError] = field(default_factory=list)
    categories: List[str] = field(default_factory=list)


class CSVProcessor:
    """
    Parses uploaded CSV text into product records.

    The dialect is naive: lines are split on newlines, values on
    commas, and double quotes are stripped literally. Quoted fields holding a
    comma are not supported and shift the remaining columns.

    Numbers are parsed whole: "12abc" is not a price and "5.7" is not a
    stock count, so such rows are rejected rather than truncated.
    """

    REQUIRED_COLUMNS = ['name', 'sku', 'price', 'stock']
    TEMPLATE_COLUMNS = ['name', 'sku', 'category', 'description', 'price', 'stock', 'status']
    TEMPLATE_ROW = ['"Sample Laptop"', '"SL-001"', '"Electronics"', '"A great sample laptop"', '999.99', '50', '"Active"']

    def __init__(
        self,
        default_category: str = "Uncategorized",
        placeholder_image_url: str = "https://picsum.photos/seed/{seed}/400/400"
    ):
        self.default_category = default_category
        self.placeholder_image_url = placeholder_image_url

    @staticmethod
    def decode(file_content: bytes) -> str:
        try:
            return file_content.decode('utf-8-sig')
        except UnicodeDecodeError as e:
            raise ImportReadError(f"File is not valid UTF-8: {e}") from e

    @staticmethod
    def clean_value(value: str) -> str:
        return value.strip().replace('"', '')

    @staticmethod
    def split_lines(text: str) -> Tuple[List[str], List[str]]:
        """Return (header, data_lines). An empty text yields no lines at all."""
        lines = text.strip().split('\n')
        if not lines or not lines[0].strip():
            return [], []
        header = [CSVProcessor.clean_value(h) for h in lines[0].split(',')]
        return header, lines[1:]

    @staticmethod
    def parse_row(header: List[str], line: str) -> Dict[str, str]:
        """Zip positional values against the header; missing trailing values are ''."""
        values = line.split(',')
        row = {}
        for i, key in enumerate(header):
            row[key] = CSVProcessor.clean_value(values[i]) if i < len(values) else ''
        return row

    @staticmethod
    def parse_price(raw: str) -> Optional[float]:
        try:
            price = float(raw)
        except ValueError:
            return None
        return price if math.isfinite(price) else None

    @staticmethod
    def parse_stock(raw: str) -> Optional[int]:
        try:
            return int(raw)
        except ValueError:
            pass
        try:
            number = float(raw)
        except ValueError:
            return None
        return int(number) if number.is_integer() else None

    @staticmethod
    def resolve_status(raw: str) -> ProductStatus:
        for status in ProductStatus:
            if status.value == raw:
                return status
        return ProductStatus.ACTIVE

    @staticmethod
    def parse_timestamp(raw: str, default: datetime) -> datetime:
        if not raw:
            return default
        try:
            return _datetime.validate_python(raw)
        except PydanticValidationError:
            logger.warning("Ignoring unparseable timestamp %r in import", raw)
            return default

    def build_product(
        self,
        row: Dict[str, str],
        row_number: int,
        category: str,
        now: datetime
    ) -> Product:
        if any(not row.get(column) for column in self.REQUIRED_COLUMNS):
            raise ImportRowError(row_number, MISSING_FIELDS_MESSAGE)

        price = self.parse_price(row['price'])
        stock = self.parse_stock(row['stock'])
        if price is None or price <= 0 or stock is None or stock < 0:
            raise ImportRowError(row_number, INVALID_NUMBER_MESSAGE)

        seed = f"{int(now.timestamp() * 1000)}_{row_number}"
        return Product(
            id=new_product_id(),
            name=row['name'],
            sku=row['sku'],
            category=category,
            description=row.get('description') or '',
            price=price,
            stock=stock,
            status=self.resolve_status(row.get('status') or ''),
            image_url=row.get('imageUrl') or self.placeholder_image_url.format(seed=seed),
            last_updated=now,
            date_added=self.parse_timestamp(row.get('dateAdded') or '', now),
            is_featured=(row.get('isFeatured') or '').lower() == 'true',
            contact_email=row.get('contactEmail') or '',
            product_url=row.get('productUrl') or '',
        )

    def parse(self, text: str, registry: Optional[CategoryRegistry] = None) -> ParsedImport:
        """
        Validate every data row independently.
        Categories are matched case-insensitively against the registry and
        against earlier rows so one spelling is kept per category.
        """
        result = ParsedImport()
        header, lines = self.split_lines(text)
        if not lines:
            result.errors.append(ImportRowError(1, EMPTY_FILE_MESSAGE))
            return result

        now = utcnow()
        seen: Dict[str, str] = {}
        for index, line in enumerate(lines):
            row_number = index + 2
            try:
                row = self.parse_row(header, line)
                raw_category = row.get('category') or self.default_category
                category = seen.get(raw_category.lower())
                if category is None and registry is not None:
                    category = registry.find(raw_category)
                category = category or raw_category

                product = self.build_product(row, row_number, category, now)
            except ImportRowError as e:
                result.errors.append(e)
                continue
            except Exception as e:
                logger.exception("Unexpected error importing row %d", row_number)
                result.errors.append(ImportRowError(row_number, str(e)))
                continue

            if category.lower() not in seen:
                seen[category.lower()] = category
                result.categories.append(category)
            result.products.append(product)

        return result

    def import_csv(self, text: str, store: ProductStore, registry: CategoryRegistry) -> ImportResult:
        """Parse, then commit every valid row at once. Never raises."""
        parsed = self.parse(text, registry)

        if parsed.products:
            store.add_imported(parsed.products)
        added = registry.merge(parsed.categories)
        if added:
            logger.info("Import added categories: %s", ", ".join(added))

        logger.info(
            "CSV import finished: %d imported, %d rejected",
            len(parsed.products),
            len(parsed.errors)
        )
        return ImportResult(
            success_count=len(parsed.products),
            errors=[ImportErrorItem(row=e.row, message=e.message) for e in parsed.errors],
        )

    @staticmethod
    def read_failure() -> ImportResult:
        return ImportResult(
            success_count=0,
            errors=[ImportErrorItem(row=0, message=READ_FAILED_MESSAGE)],
        )

    @classmethod
    def template(cls) -> str:
        return ','.join(cls.TEMPLATE_COLUMNS) + '\n' + ','.join(cls.TEMPLATE_ROW) + '\n'
