"""
Summary Service - consolidates the recorded canvas answers into one overview
"""
import json
import logging
from typing import Dict

from config.bmc_sections import get_section
from errors import InsufficientData
from services.retry_policy import RetryPolicy
from services.session_store import SessionStore

logger = logging.getLogger(__name__)

INSUFFICIENT_DATA_NOTICE = "⚠️ لم يتم جمع بيانات كافية لتوليد ملخص. يرجى إكمال المزيد من الأسئلة."

CLOSING_TIP = "💡 **نصيحة:** يمكنك تحسين نموذج عملك من خلال التركيز على تناسق جميع الأقسام مع بعضها البعض."


def build_summary_prompt(answers: Dict[str, str]) -> str:
    if not answers:
        raise InsufficientData()

    return f"""
قم بإنشاء ملخص واضح وشامل باللغة العربية لنموذج العمل التجاري للطالب بناءً على البيانات التالية:
{json.dumps(answers, ensure_ascii=False, indent=2)}

الملخص يجب أن:
- يكون باللغة العربية
- يكون منظماً وواضحاً
- يسلط الضوء على النقاط الرئيسية
- يعطي نظرة شاملة عن نموذج العمل
"""


def render_fallback_summary(answers: Dict[str, str]) -> str:
    """Deterministic summary listing every recorded answer in insertion order."""
    lines = []
    for key, answer in answers.items():
        section = get_section(key)
        label = section.title if section else key
        lines.append(f"**{label}:** {answer}")

    body = "\n\n".join(lines)
    return f"""📊 **ملخص نموذج العمل التجاري**

بناءً على البيانات المقدمة، إليك نظرة عامة على نموذج عملك:

{body}

{CLOSING_TIP}"""


class SummaryService:

    def __init__(self, store: SessionStore, retry_policy: RetryPolicy):
        self.store = store
        self.retry_policy = retry_policy

    async def final_summary(self, session_id: str) -> str:
        session = self.store.require(session_id)
        answers = dict(session.answers)

        try:
            prompt = build_summary_prompt(answers)
        except InsufficientData:
            return INSUFFICIENT_DATA_NOTICE

        try:
            return await self.retry_policy.generate_with_retry(prompt)
        except Exception as e:
            logger.warning(f"Summary generation failed for session {session_id}: {e} - using template")
            return render_fallback_summary(answers)
