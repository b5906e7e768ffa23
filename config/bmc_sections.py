"""
The nine fixed sections of the Business Model Canvas
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CanvasSection:
    key: str
    title: str
    fallback_question: str


BMC_SECTIONS = (
    CanvasSection(
        key="partners",
        title="الشركاء الرئيسيون",
        fallback_question="من هم الشركاء الرئيسيون الذين تحتاجهم لتنفيذ مشروعك؟",
    ),
    CanvasSection(
        key="activities",
        title="الأنشطة الرئيسية",
        fallback_question="ما هي الأنشطة الرئيسية التي يجب القيام بها لتقديم قيمة للعملاء؟",
    ),
    CanvasSection(
        key="resources",
        title="الموارد الرئيسية",
        fallback_question="ما هي الموارد الرئيسية التي تحتاجها لتشغيل المشروع؟",
    ),
    CanvasSection(
        key="value",
        title="القيمة المقترحة",
        fallback_question="ما هي القيمة المميزة التي يقدمها مشروعك للعملاء؟",
    ),
    CanvasSection(
        key="customers",
        title="شرائح العملاء",
        fallback_question="من هم العملاء المستهدفون لمشروعك؟",
    ),
    CanvasSection(
        key="channels",
        title="قنوات التوزيع",
        fallback_question="كيف ستصل إلى عملائك وتقدم لهم خدماتك؟",
    ),
    CanvasSection(
        key="relationships",
        title="علاقات العملاء",
        fallback_question="كيف ستبني وتحافظ على علاقات مع عملائك؟",
    ),
    CanvasSection(
        key="revenue",
        title="مصادر الإيرادات",
        fallback_question="كيف ستحقق الإيرادات من مشروعك؟",
    ),
    CanvasSection(
        key="costs",
        title="هيكل التكاليف",
        fallback_question="ما هي التكاليف الرئيسية التي ستتحملها في مشروعك؟",
    ),
)

TOTAL_SECTIONS = len(BMC_SECTIONS)

# Used when a section key is not part of the canvas
GENERIC_FALLBACK_QUESTION = "أخبرني المزيد عن هذا الجانب من مشروعك."

_SECTIONS_BY_KEY = {section.key: section for section in BMC_SECTIONS}


def section_for_progress(progress: int) -> CanvasSection:
    """Return the active section for a progress counter (wraps every nine answers)."""
    if progress < 0:
        raise ValueError("progress must be non-negative")
    return BMC_SECTIONS[progress % TOTAL_SECTIONS]


def get_section(key: str) -> Optional[CanvasSection]:
    return _SECTIONS_BY_KEY.get(key)


def fallback_question_for(key: str) -> str:
    section = _SECTIONS_BY_KEY.get(key)
    return section.fallback_question if section else GENERIC_FALLBACK_QUESTION
