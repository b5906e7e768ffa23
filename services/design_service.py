"""
Design Assistant Service - free-form design and entrepreneurship help
"""
import logging
from dataclasses import dataclass
from typing import Tuple

from models.session import MODE_DESIGN
from services.retry_policy import RetryPolicy
from services.session_store import SessionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TopicBucket:
    key: str
    label: str
    keywords: Tuple[str, ...]
    advice: str


TOOLS_TIP = "💡 *يمكنك استخدام أدوات مثل: Canva, Figma, Adobe Express للبدء*"

# Checked in order; the first bucket with a matching keyword wins
TOPIC_BUCKETS = (
    TopicBucket(
        key="logo",
        label="تصميم الشعار",
        keywords=("شعار", "لوجو", "logo"),
        advice=(
            "• اختر ألواناً تعبر عن هوية مشروعك\n"
            "• استخدم خطوطاً واضحة وسهلة القراءة\n"
            "• اجعل الشعار بسيطاً وقابلاً للتذكر\n"
            "• تأكد من وضوح الشعار بمختلف الأحجام\n"
            "• فكر في القيمة التي يقدمها مشروعك"
        ),
    ),
    TopicBucket(
        key="website",
        label="تصميم الموقع الإلكتروني",
        keywords=("موقع", "ويب", "website"),
        advice=(
            "• ركز على تجربة المستخدم البسيطة\n"
            "• استخدم ألواناً متناسقة مع الهوية\n"
            "• اجعل الموقع سريع التحميل\n"
            "• تأكد من توافقه مع الجوال\n"
            "• استخدم صوراً عالية الجودة"
        ),
    ),
    TopicBucket(
        key="identity",
        label="الهوية البصرية",
        keywords=("هوية", "براند", "brand"),
        advice=(
            "• حدد لوحة ألوان ثابتة\n"
            "• اختر خطوطاً متناسقة\n"
            "• أنشئ دليل هوية مرئية\n"
            "• حافظ على الاتساق في جميع المواد\n"
            "• فكر في جمهورك المستهدف"
        ),
    ),
    TopicBucket(
        key="cover",
        label="تصميم الغلاف",
        keywords=("غلاف", "كتاب", "cover"),
        advice=(
            "• اجعل العنوان أوضح عنصر في التصميم\n"
            "• استخدم صورة أو رسمة واحدة قوية بدلاً من عناصر كثيرة\n"
            "• اختر ألواناً تناسب موضوع المحتوى\n"
            "• اترك مساحات فارغة كافية حول النصوص\n"
            "• اختبر وضوح الغلاف كصورة مصغرة"
        ),
    ),
    TopicBucket(
        key="social",
        label="تصميم منشورات وسائل التواصل",
        keywords=("منشور", "سوشيال", "social"),
        advice=(
            "• استخدم قوالب ثابتة تحمل ألوان هويتك\n"
            "• رسالة واحدة واضحة في كل منشور\n"
            "• راعِ المقاسات المناسبة لكل منصة\n"
            "• أضف دعوة واضحة للتفاعل\n"
            "• خطط لتقويم نشر أسبوعي منتظم"
        ),
    ),
    TopicBucket(
        key="presentation",
        label="تصميم العروض التقديمية",
        keywords=("عرض", "عروض", "presentation"),
        advice=(
            "• فكرة واحدة في كل شريحة\n"
            "• استخدم نصوصاً قصيرة وخطاً كبيراً\n"
            "• اعتمد على الرسوم البيانية والصور بدلاً من الفقرات\n"
            "• حافظ على قالب موحد بألوان الهوية\n"
            "• اختم بشريحة تلخص القيمة وطلبك من الجمهور"
        ),
    ),
)

GENERIC_BUCKET = TopicBucket(
    key="general",
    label="عام",
    keywords=(),
    advice=(
        "يمكنني مساعدتك في:\n\n"
        "• تصميم الشعار والهوية البصرية\n"
        "• تصميم المواقع والتطبيقات\n"
        "• تصميم العروض التقديمية\n"
        "• تصميم منشورات وسائل التواصل\n"
        "• نصائح الألوان والخطوط\n"
        "• أدوات التصميم المجانية\n\n"
        "ما هو نوع التصميم الذي تحتاجه؟"
    ),
)

DESIGN_WELCOME_MESSAGE = (
    "🎨 **مرحباً! أنا مساعدك في التصميم الإبداعي**\n\n"
    "يمكنني مساعدتك في:\n"
    "• تصميم الشعار والهوية البصرية\n"
    "• نصائح الألوان والخطوط\n"
    "• تصميم المواقع والعروض التقديمية\n"
    "• أدوات التصميم المجانية\n\n"
    "ما هو التصميم الذي تريد المساعدة فيه؟"
)


def classify_message(message: str) -> TopicBucket:
    lowered = message.lower()
    for bucket in TOPIC_BUCKETS:
        if any(keyword in lowered for keyword in bucket.keywords):
            return bucket
    return GENERIC_BUCKET


def build_design_prompt(bucket: TopicBucket, message: str) -> str:
    return f"""
أنت مساعد ذكي متخصص في التصميم الجرافيكي وتطوير المشاريع لطلاب حاضنة أعمال 3win.
المجال: {bucket.label}
سؤال الطالب: "{message}"

قم بتقديم المساعدة في:
1. نصائح تصميمية عملية
2. أفكار إبداعية مناسبة للمشاريع الناشئة
3. توجهات حول الألوان والخطوط والتخطيط
4. اقتراحات tools وبرامج مفيدة
5. أفضل الممارسات في التصميم

إذا كان السؤال ليس عن التصميم، قدم إجابة مفيدة في مجال ريادة الأعمال وتطوير المشاريع.

أجب باللغة العربية بطريقة:
- مهنية وإبداعية
- عملية وقابلة للتطبيق
- مراعية لميزانية الطلاب
- تشجع الإبداع والابتكار

الإجابة:
"""


def render_fallback_answer(bucket: TopicBucket) -> str:
    parts = ["🎨 **مساعد التصميم الإبداعي**"]
    if bucket is GENERIC_BUCKET:
        parts.append(bucket.advice)
    else:
        parts.append(f"في مجال {bucket.label}، أنصحك بـ:\n\n{bucket.advice}")
    parts.append(TOOLS_TIP)
    return "\n\n".join(parts)


def build_suggestions_prompt(project_type: str) -> str:
    return f"""
أنت مصمم جرافيكي محترف تقدم استشارات لطلاب حاضنة أعمال 3win.
نوع المشروع: {project_type}

قدم 3 اقتراحات تصميمية إبداعية تشمل:
1. لوحة ألوان مناسبة
2. نمط تصميم مقترح
3. نصائح typography
4. أفكار إبداعية للهوية
5. أدوات مجانية مقترحة

أجب باللغة العربية بطريقة إبداعية ومحفزة.
"""


def render_fallback_suggestions(project_type: str) -> str:
    return f"""🎯 **اقتراحات تصميمية لـ {project_type}**

1. **النمط البسيط والحديث**
   - الألوان: أزرق مهني + أبيض + رمادي
   - الخطوط: sans-serif واضحة
   - ركز على البساطة والوضوح

2. **النمط الإبداعي الجريء**
   - الألوان: ألوان زاهية ومتناقضة
   - الخطوط: مزيج بين classic وmodern
   - شجع على الإبداع والتميز

3. **النمط الاحترافي التقليدي**
   - الألوان: درجات محايدة واحترافية
   - الخطوط: serif كلاسيكية
   - يناسب المشاريع التقليدية

🛠️ **أدوات مجانية**: Canva, Figma, Adobe Color, Google Fonts"""


class DesignService:

    def __init__(self, store: SessionStore, retry_policy: RetryPolicy):
        self.store = store
        self.retry_policy = retry_policy

    async def respond(self, session_id: str, message: str) -> str:
        """Answer a free-form message, creating the session in design mode if needed."""
        self.store.get_or_create(session_id, MODE_DESIGN)
        self.store.record_user_message(session_id, message)

        bucket = classify_message(message)
        prompt = build_design_prompt(bucket, message)

        try:
            answer = await self.retry_policy.generate_with_retry(prompt)
        except Exception as e:
            logger.warning(f"Design assistant generation failed (topic={bucket.key}): {e} - using canned answer")
            answer = render_fallback_answer(bucket)

        self.store.record_assistant_message(session_id, answer)
        return answer

    async def suggestions(self, project_type: str) -> str:
        try:
            return await self.retry_policy.generate_with_retry(build_suggestions_prompt(project_type))
        except Exception as e:
            logger.warning(f"Design suggestions failed for '{project_type}': {e} - using template")
            return render_fallback_suggestions(project_type)

    def switch_mode(self, session_id: str, mode: str):
        """Switch mode; greets the student the first time an empty session enters design mode."""
        session = self.store.set_mode(session_id, mode)
        if mode == MODE_DESIGN and not session.chat:
            self.store.record_assistant_message(session_id, DESIGN_WELCOME_MESSAGE)
        return session
