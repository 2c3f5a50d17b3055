"""Locale-specific keyword tables and default texts.

Extraction and repair logic read everything language-dependent from an
``AnalysisVocabulary`` so a locale can be swapped without touching control
flow.
"""

import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from docfin.analysis.models import EXPENSE, INCOME, Transaction

EXPENSE_PATTERN = re.compile(
    r"expense|cost|payment|buy|purchase|biaya|bayar|beli|keluar", re.IGNORECASE
)
SALES_PATTERN = re.compile(r"sales|penjualan|revenue|pendapatan", re.IGNORECASE)
MARKETING_PATTERN = re.compile(r"marketing|promosi|iklan", re.IGNORECASE)
OPERATIONAL_PATTERN = re.compile(r"operational|operasional", re.IGNORECASE)
HR_PATTERN = re.compile(r"salary|gaji|payroll", re.IGNORECASE)

PLACEHOLDER_DATE = date(2024, 1, 15)


@dataclass(frozen=True)
class CategoryRule:
    label: str
    pattern: re.Pattern[str]


@dataclass(frozen=True)
class AnalysisVocabulary:
    locale: str
    expense_pattern: re.Pattern[str]
    category_rules: tuple[CategoryRule, ...]
    prompt_categories: tuple[str, ...]
    placeholders: tuple[Transaction, ...]
    default_category: str = "General"
    default_description: str = "Transaction"
    placeholder_date: date = PLACEHOLDER_DATE
    materiality_threshold: Decimal = Decimal(1000)
    default_insight: str = "Financial analysis has been processed."
    fallback_intro_insight: str = ""
    fallback_count_insight: str = "{count}"
    profit_insight: str = ""
    loss_insight: str = ""
    summary_unavailable: str = ""
    key_points_unavailable: str = ""
    recommendations_unavailable: str = ""
    summary_failure: str = "{error}"
    failure_key_points: tuple[str, ...] = ()
    failure_recommendations: tuple[str, ...] = ()

    def categorize(self, line: str) -> str:
        for rule in self.category_rules:
            if rule.pattern.search(line):
                return rule.label
        return self.default_category


INDONESIAN = AnalysisVocabulary(
    locale="id",
    expense_pattern=EXPENSE_PATTERN,
    category_rules=(
        CategoryRule("Penjualan", SALES_PATTERN),
        CategoryRule("Marketing", MARKETING_PATTERN),
        CategoryRule("Operasional", OPERATIONAL_PATTERN),
        CategoryRule("SDM", HR_PATTERN),
    ),
    prompt_categories=(
        "Penjualan",
        "Marketing",
        "Operasional",
        "SDM",
        "Pembelian",
        "Sewa",
        "Utilitas",
        "Pajak",
        "General",
    ),
    placeholders=(
        Transaction(
            id="sample_1",
            date=date(2024, 1, 15),
            description="Transaksi yang diekstrak dari dokumen",
            amount=Decimal(5_000_000),
            type=INCOME,
            category="Penjualan",
        ),
        Transaction(
            id="sample_2",
            date=date(2024, 1, 10),
            description="Biaya operasional dari dokumen",
            amount=Decimal(-2_000_000),
            type=EXPENSE,
            category="Operasional",
        ),
    ),
    default_description="Transaksi",
    default_insight="Analisis keuangan telah selesai diproses.",
    fallback_intro_insight="Analisis berhasil mengekstrak data transaksi dari dokumen keuangan Anda.",
    fallback_count_insight="Total {count} transaksi berhasil diidentifikasi.",
    profit_insight="Laporan menunjukkan laba bersih yang positif.",
    loss_insight="Perhatikan pengeluaran yang melebihi pemasukan.",
    summary_unavailable="Ringkasan tidak tersedia",
    key_points_unavailable="Poin kunci tidak tersedia",
    recommendations_unavailable="Rekomendasi tidak tersedia",
    summary_failure="Maaf, terjadi kesalahan saat menganalisis dokumen: {error}",
    failure_key_points=(
        "Tidak dapat memproses dokumen saat ini",
        "Untuk PDF: Pastikan dokumen berisi teks (bukan hanya gambar)",
        "Untuk gambar: Pastikan teks di gambar jelas dan dapat dibaca",
        "Format yang didukung: PDF dengan teks, JPG, PNG",
    ),
    failure_recommendations=(
        "Coba scan ulang dokumen dengan kualitas yang lebih baik",
        "Pastikan teks di dokumen jelas dan tidak terlalu kecil",
        "Jika PDF, pastikan bukan hasil scan yang berkualitas rendah",
        "Hubungi tim dukungan jika masalah berlanjut",
    ),
)

ENGLISH = AnalysisVocabulary(
    locale="en",
    expense_pattern=EXPENSE_PATTERN,
    category_rules=(
        CategoryRule("Sales", SALES_PATTERN),
        CategoryRule("Marketing", MARKETING_PATTERN),
        CategoryRule("Operational", OPERATIONAL_PATTERN),
        CategoryRule("HR", HR_PATTERN),
    ),
    prompt_categories=(
        "Sales",
        "Marketing",
        "Operational",
        "HR",
        "Purchasing",
        "Rent",
        "Utilities",
        "Tax",
        "General",
    ),
    placeholders=(
        Transaction(
            id="sample_1",
            date=date(2024, 1, 15),
            description="Transaction extracted from the document",
            amount=Decimal(5_000_000),
            type=INCOME,
            category="Sales",
        ),
        Transaction(
            id="sample_2",
            date=date(2024, 1, 10),
            description="Operational cost from the document",
            amount=Decimal(-2_000_000),
            type=EXPENSE,
            category="Operational",
        ),
    ),
    fallback_intro_insight="Transaction data was extracted from your financial document.",
    fallback_count_insight="{count} transactions were identified in total.",
    profit_insight="The report shows a positive net profit.",
    loss_insight="Expenses exceed income; review your spending.",
    summary_unavailable="Summary not available",
    key_points_unavailable="Key points not available",
    recommendations_unavailable="Recommendations not available",
    summary_failure="Sorry, the document could not be analysed: {error}",
    failure_key_points=(
        "The document cannot be processed right now",
        "For PDFs: make sure the document contains text, not only images",
        "For images: make sure the text is sharp and readable",
        "Supported formats: text PDFs, JPG, PNG",
    ),
    failure_recommendations=(
        "Scan the document again at a higher quality",
        "Make sure the text is clear and not too small",
        "For PDFs, avoid low-quality scans",
        "Contact support if the problem persists",
    ),
)

VOCABULARIES: dict[str, AnalysisVocabulary] = {
    INDONESIAN.locale: INDONESIAN,
    ENGLISH.locale: ENGLISH,
}

DEFAULT_VOCABULARY = INDONESIAN


def vocabulary_for(locale: str) -> AnalysisVocabulary:
    vocabulary = VOCABULARIES.get(locale.lower())
    if vocabulary is None:
        raise ValueError(f"Unknown analysis locale '{locale}'. Choose from: {list(VOCABULARIES)}")
    return vocabulary
