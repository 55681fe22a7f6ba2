import csv
import io
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

from pydantic import TypeAdapter
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from inventory_console.exceptions import NothingToExportError
from inventory_console.models.base import utcnow
from inventory_console.models.product import PRODUCT_FIELDS, Product, field_alias
from inventory_console.services.csv_processor import CSVProcessor

logger = logging.getLogger(__name__)

CSV_COLUMNS = [field_alias(name) for name in PRODUCT_FIELDS]
PDF_COLUMNS = ["Name", "SKU", "Category", "Price ($)", "Stock", "Status"]
PDF_HEADER_COLOR = colors.Color(37 / 255, 99 / 255, 235 / 255)
PDF_STRIPE_COLOR = colors.Color(245 / 255, 245 / 255, 245 / 255)

_products_adapter = TypeAdapter(List[Product])


@dataclass
class ExportFile:
    filename: str
    media_type: str
    content: bytes


def _csv_value(value):
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def encode_csv(products: Sequence[Product]) -> bytes:
    """Fixed column order; strings quoted, numbers bare."""
    buffer = io.StringIO()
    buffer.write(",".join(CSV_COLUMNS) + "\n")
    writer = csv.writer(buffer, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    for product in products:
        record = product.model_dump(mode="json", by_alias=True)
        writer.writerow([_csv_value(record[column]) for column in CSV_COLUMNS])
    return buffer.getvalue().encode("utf-8")


def encode_json(products: Sequence[Product]) -> bytes:
    return _products_adapter.dump_json(list(products), indent=2, by_alias=True)


def encode_pdf(products: Sequence[Product], generated_at: Optional[datetime] = None) -> bytes:
    generated_at = generated_at or utcnow()
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=14 * mm,
        rightMargin=14 * mm,
        topMargin=14 * mm,
        title="Product Inventory Report",
    )
    styles = getSampleStyleSheet()

    rows = [PDF_COLUMNS] + [
        [p.name, p.sku, p.category, f"{p.price:.2f}", str(p.stock), p.status.value]
        for p in products
    ]
    table = Table(rows, repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), PDF_HEADER_COLOR),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, PDF_STRIPE_COLOR]),
        ("ALIGN", (3, 1), (4, -1), "RIGHT"),
    ]))

    story = [
        Paragraph("Product Inventory Report", styles["Title"]),
        Paragraph(f"Generated on: {generated_at.strftime('%Y-%m-%d %H:%M:%S %Z')}", styles["Normal"]),
        Spacer(1, 6 * mm),
        table,
    ]
    doc.build(story)
    return buffer.getvalue()


ENCODERS = {
    "csv": ("products_export.csv", "text/csv; charset=utf-8", encode_csv),
    "json": ("products_export.json", "application/json", encode_json),
    "pdf": ("products_export.pdf", "application/pdf", encode_pdf),
}


def export_products(products: Sequence[Product], export_format: str) -> ExportFile:
    if not products:
        raise NothingToExportError("There is no data to export for the selected scope.")
    try:
        filename, media_type, encoder = ENCODERS[export_format]
    except KeyError:
        raise ValueError(f"Unsupported export format '{export_format}'")
    content = encoder(products)
    logger.info("Exported %d products as %s (%d bytes)", len(products), export_format, len(content))
    return ExportFile(filename=filename, media_type=media_type, content=content)


def import_template() -> ExportFile:
    return ExportFile(
        filename="product_import_template.csv",
        media_type="text/csv; charset=utf-8",
        content=CSVProcessor.template().encode("utf-8"),
    )
