"""
Static surah metadata used to map global verse ids back to sura:aya.
"""
from itertools import accumulate

SURA_AYA_COUNTS = (
    7, 286, 200, 176, 120, 165, 206, 75, 129, 109, 123, 111, 43, 52, 99, 128,
    111, 110, 98, 135, 112, 78, 118, 64, 77, 227, 93, 88, 69, 60, 34, 30, 73,
    54, 45, 83, 182, 88, 75, 85, 54, 53, 89, 59, 37, 35, 38, 29, 18, 45, 60,
    49, 62, 55, 78, 96, 29, 22, 24, 13, 14, 11, 11, 18, 12, 12, 30, 52, 52,
    44, 28, 28, 20, 56, 40, 31, 50, 40, 46, 42, 29, 19, 36, 25, 22, 17, 19,
    26, 30, 20, 15, 21, 11, 8, 8, 19, 5, 8, 8, 11, 11, 8, 3, 9, 5, 4, 7, 3,
    6, 3, 5, 4, 5, 6,
)

TOTAL_SURAS  = len(SURA_AYA_COUNTS)
TOTAL_VERSES = sum(SURA_AYA_COUNTS)

# Global id of the first verse of each sura (1-based ids)
_SURA_START_IDS = tuple(start + 1 for start in accumulate((0,) + SURA_AYA_COUNTS[:-1]))

SURA_NAMES = (
    "الفاتحة", "البقرة", "آل عمران", "النساء", "المائدة", "الأنعام", "الأعراف",
    "الأنفال", "التوبة", "يونس", "هود", "يوسف", "الرعد", "إبراهيم", "الحجر",
    "النحل", "الإسراء", "الكهف", "مريم", "طه", "الأنبياء", "الحج", "المؤمنون",
    "النور", "الفرقان", "الشعراء", "النمل", "القصص", "العنكبوت", "الروم",
    "لقمان", "السجدة", "الأحزاب", "سبأ", "فاطر", "يس", "الصافات", "ص", "الزمر",
    "غافر", "فصلت", "الشورى", "الزخرف", "الدخان", "الجاثية", "الأحقاف", "محمد",
    "الفتح", "الحجرات", "ق", "الذاريات", "الطور", "النجم", "القمر", "الرحمن",
    "الواقعة", "الحديد", "المجادلة", "الحشر", "الممتحنة", "الصف", "الجمعة",
    "المنافقون", "التغابن", "الطلاق", "التحريم", "الملك", "القلم", "الحاقة",
    "المعارج", "نوح", "الجن", "المزمل", "المدثر", "القيامة", "الإنسان",
    "المرسلات", "النبأ", "النازعات", "عبس", "التكوير", "الانفطار", "المطففين",
    "الانشقاق", "البروج", "الطارق", "الأعلى", "الغاشية", "الفجر", "البلد",
    "الشمس", "الليل", "الضحى", "الشرح", "التين", "العلق", "القدر", "البينة",
    "الزلزلة", "العاديات", "القارعة", "التكاثر", "العصر", "الهمزة", "الفيل",
    "قريش", "الماعون", "الكوثر", "الكافرون", "النصر", "المسد", "الإخلاص",
    "الفلق", "الناس",
)


def get_sura_name(sura: int) -> str:
    if 1 <= sura <= TOTAL_SURAS:
        return SURA_NAMES[sura - 1]
    return f"Sura {sura}"


def verse_id_for_key(sura: int, aya: int) -> int:
    if not 1 <= sura <= TOTAL_SURAS or not 1 <= aya <= SURA_AYA_COUNTS[sura - 1]:
        raise ValueError(f"No such verse: {sura}:{aya}")
    return _SURA_START_IDS[sura - 1] + aya - 1


def verse_key_for_id(verse_id: int) -> tuple[int, int]:
    """Map a global verse id (1..6236) to (sura, aya)."""
    if not 1 <= verse_id <= TOTAL_VERSES:
        raise ValueError(f"Verse id out of range: {verse_id}")
    for sura in range(TOTAL_SURAS, 0, -1):
        start = _SURA_START_IDS[sura - 1]
        if verse_id >= start:
            return sura, verse_id - start + 1
    return 1, verse_id


def parse_verse_key(key: str) -> tuple[int, int]:
    sura, aya = key.split(":")[:2]
    return int(sura), int(aya)
