"""Canonical table of the 66 Bible books.

This module provides lookups from project identifiers (lowercase,
e.g. 'gen') and USFM codes (uppercase, e.g. 'GEN') to book info,
including the English names used as the localized-name fallback.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class BookInfo:
    """One canonical Bible book.

    Attributes:
        id: Lowercase identifier (e.g. 'gen')
        code: Uppercase USFM code (e.g. 'GEN')
        sort: Canonical order, 1-66
        abbr: English abbreviation (e.g. 'Gen')
        short: English short name (e.g. 'Genesis')
        long: English long name (e.g. 'The Book of Genesis')
    """

    id: str
    code: str
    sort: int
    abbr: str
    short: str
    long: str


ALL_BOOKS: tuple[BookInfo, ...] = (
    BookInfo("gen", "GEN", 1, "Gen", "Genesis", "The Book of Genesis"),
    BookInfo("exo", "EXO", 2, "Exo", "Exodus", "The Book of Exodus"),
    BookInfo("lev", "LEV", 3, "Lev", "Leviticus", "The Book of Leviticus"),
    BookInfo("num", "NUM", 4, "Num", "Numbers", "The Book of Numbers"),
    BookInfo("deu", "DEU", 5, "Deu", "Deuteronomy", "The Book of Deuteronomy"),
    BookInfo("jos", "JOS", 6, "Jos", "Joshua", "The Book of Joshua"),
    BookInfo("jdg", "JDG", 7, "Jdg", "Judges", "The Book of Judges"),
    BookInfo("rut", "RUT", 8, "Rut", "Ruth", "The Book of Ruth"),
    BookInfo("1sa", "1SA", 9, "1Sa", "First Samuel", "The First Book of Samuel"),
    BookInfo("2sa", "2SA", 10, "2Sa", "Second Samuel", "The Second Book of Samuel"),
    BookInfo("1ki", "1KI", 11, "1Ki", "First Kings", "The First Book of Kings"),
    BookInfo("2ki", "2KI", 12, "2Ki", "Second Kings", "The Second Book of Kings"),
    BookInfo("1ch", "1CH", 13, "1Ch", "First Chronicles", "The First Book of the Chronicles"),
    BookInfo("2ch", "2CH", 14, "2Ch", "Second Chronicles", "The Second Book of the Chronicles"),
    BookInfo("ezr", "EZR", 15, "Ezr", "Ezra", "The Book of Ezra"),
    BookInfo("neh", "NEH", 16, "Neh", "Nehemiah", "The Book of Nehemiah"),
    BookInfo("est", "EST", 17, "Est", "Esther", "The Book of Esther"),
    BookInfo("job", "JOB", 18, "Job", "Job", "The Book of Job"),
    BookInfo("psa", "PSA", 19, "Psa", "Psalms", "The Book of Psalms"),
    BookInfo("pro", "PRO", 20, "Pro", "Proverbs", "The Book of Proverbs"),
    BookInfo("ecc", "ECC", 21, "Ecc", "Ecclesiastes", "The Book of Ecclesiastes"),
    BookInfo("sng", "SNG", 22, "Sng", "Song of Songs", "The Song of Songs"),
    BookInfo("isa", "ISA", 23, "Isa", "Isaiah", "The Book of Isaiah"),
    BookInfo("jer", "JER", 24, "Jer", "Jeremiah", "The Book of Jeremiah"),
    BookInfo("lam", "LAM", 25, "Lam", "Lamentations", "The Book of Lamentations"),
    BookInfo("ezk", "EZK", 26, "Ezk", "Ezekiel", "The Book of Ezekiel"),
    BookInfo("dan", "DAN", 27, "Dan", "Daniel", "The Book of Daniel"),
    BookInfo("hos", "HOS", 28, "Hos", "Hosea", "The Book of Hosea"),
    BookInfo("jol", "JOL", 29, "Jol", "Joel", "The Book of Joel"),
    BookInfo("amo", "AMO", 30, "Amo", "Amos", "The Book of Amos"),
    BookInfo("oba", "OBA", 31, "Oba", "Obadiah", "The Book of Obadiah"),
    BookInfo("jon", "JON", 32, "Jon", "Jonah", "The Book of Jonah"),
    BookInfo("mic", "MIC", 33, "Mic", "Micah", "The Book of Micah"),
    BookInfo("nam", "NAM", 34, "Nam", "Nahum", "The Book of Nahum"),
    BookInfo("hab", "HAB", 35, "Hab", "Habakkuk", "The Book of Habakkuk"),
    BookInfo("zep", "ZEP", 36, "Zep", "Zephaniah", "The Book of Zephaniah"),
    BookInfo("hag", "HAG", 37, "Hag", "Haggai", "The Book of Haggai"),
    BookInfo("zec", "ZEC", 38, "Zec", "Zechariah", "The Book of Zechariah"),
    BookInfo("mal", "MAL", 39, "Mal", "Malachi", "The Book of Malachi"),
    BookInfo("mat", "MAT", 40, "Mat", "Matthew", "The Gospel of Matthew"),
    BookInfo("mrk", "MRK", 41, "Mrk", "Mark", "The Gospel of Mark"),
    BookInfo("luk", "LUK", 42, "Luk", "Luke", "The Gospel of Luke"),
    BookInfo("jhn", "JHN", 43, "Jhn", "John", "The Gospel of John"),
    BookInfo("act", "ACT", 44, "Act", "Acts", "The Acts of the Apostles"),
    BookInfo("rom", "ROM", 45, "Rom", "Romans", "The Letter of Paul to the Romans"),
    BookInfo("1co", "1CO", 46, "1Co", "First Corinthians", "The First Letter of Paul to the Corinthians"),
    BookInfo("2co", "2CO", 47, "2Co", "Second Corinthians", "The Second Letter of Paul to the Corinthians"),
    BookInfo("gal", "GAL", 48, "Gal", "Galatians", "The Letter of Paul to the Galatians"),
    BookInfo("eph", "EPH", 49, "Eph", "Ephesians", "The Letter of Paul to the Ephesians"),
    BookInfo("php", "PHP", 50, "Php", "Philippians", "The Letter of Paul to the Philippians"),
    BookInfo("col", "COL", 51, "Col", "Colossians", "The Letter of Paul to the Colossians"),
    BookInfo("1th", "1TH", 52, "1Th", "First Thessalonians", "The First Letter of Paul to the Thessalonians"),
    BookInfo("2th", "2TH", 53, "2Th", "Second Thessalonians", "The Second Letter of Paul to the Thessalonians"),
    BookInfo("1ti", "1TI", 54, "1Ti", "First Timothy", "The First Letter of Paul to Timothy"),
    BookInfo("2ti", "2TI", 55, "2Ti", "Second Timothy", "The Second Letter of Paul to Timothy"),
    BookInfo("tit", "TIT", 56, "Tit", "Titus", "The Letter of Paul to Titus"),
    BookInfo("phm", "PHM", 57, "Phm", "Philemon", "The Letter of Paul to Philemon"),
    BookInfo("heb", "HEB", 58, "Heb", "Hebrews", "The Letter to the Hebrews"),
    BookInfo("jas", "JAS", 59, "Jas", "James", "The Letter of James"),
    BookInfo("1pe", "1PE", 60, "1Pe", "First Peter", "The First Letter of Peter"),
    BookInfo("2pe", "2PE", 61, "2Pe", "Second Peter", "The Second Letter of Peter"),
    BookInfo("1jn", "1JN", 62, "1Jn", "First John", "The First Letter of John"),
    BookInfo("2jn", "2JN", 63, "2Jn", "Second John", "The Second Letter of John"),
    BookInfo("3jn", "3JN", 64, "3Jn", "Third John", "The Third Letter of John"),
    BookInfo("jud", "JUD", 65, "Jud", "Jude", "The Letter of Jude"),
    BookInfo("rev", "REV", 66, "Rev", "Revelation", "The Book of Revelation"),
)

_BY_ID = {book.id: book for book in ALL_BOOKS}
_BY_CODE = {book.code: book for book in ALL_BOOKS}


def by_id(book_id: str) -> BookInfo | None:
    """Return the book for an identifier (case-insensitive), or None."""
    return _BY_ID.get(book_id.lower())


def by_code(code: str) -> BookInfo | None:
    """Return the book for a USFM code (case-insensitive), or None."""
    return _BY_CODE.get(code.upper())


def is_book_id(book_id: str) -> bool:
    """Return True if the identifier names one of the 66 books."""
    return book_id.lower() in _BY_ID


def code_from_project_id(book_id: str) -> str:
    """Return the USFM code for a project identifier.

    Unrecognized identifiers are simply uppercased, e.g. 'frt' -> 'FRT'.
    """
    book = by_id(book_id)
    if book is not None:
        return book.code
    return book_id.upper()


def localized_name_key(book: BookInfo) -> str:
    """Key used for a book in the SB ``localizedNames`` map, e.g. 'book-gen'."""
    return f"book-{book.id}"
