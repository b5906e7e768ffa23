"""
BMC Question Service - guides a student through the canvas one section at a time
"""
import logging

from config.bmc_sections import CanvasSection, fallback_question_for
from models.session import MODE_BMC
from services.retry_policy import RetryPolicy
from services.session_store import SessionStore

logger = logging.getLogger(__name__)


def build_question_prompt(section: CanvasSection) -> str:
    return f"""
أنت مستشار لمشاريع طلاب حاضنة أعمال 3win في مركز جامعي مغنية.
قسم النموذج الحالي: "{section.title}".
اكتب سؤالاً واحداً باللغة العربية لتوجيه الطالب في هذا القسم.
يجب أن يكون السؤال واضحاً ومباشراً ويتعلق بـ {section.title}.
"""


class QuestionService:

    def __init__(self, store: SessionStore, retry_policy: RetryPolicy):
        self.store = store
        self.retry_policy = retry_policy

    async def next_question(self, session_id: str) -> str:
        """
        Produce the guiding question for the session's active section.

        Never fails because of the provider: on any generation error the
        section's fallback question is used instead. Either way the question
        is recorded as an assistant message.

        Raises:
            SessionNotFound: if the session does not exist
        """
        section = self.store.current_section(session_id)
        prompt = build_question_prompt(section)

        try:
            question = await self.retry_policy.generate_with_retry(prompt)
        except Exception as e:
            logger.warning(f"Question generation failed for section '{section.key}': {e} - using fallback")
            question = fallback_question_for(section.key)

        self.store.record_assistant_message(session_id, question)
        return question

    def submit_answer(self, session_id: str, answer: str) -> int:
        """
        Record the student's reply. In canvas mode it is also stored as the
        answer to the active section, which advances progress by one.

        Returns:
            The session's progress after the submission
        """
        session = self.store.require(session_id)
        self.store.record_user_message(session_id, answer)

        if session.mode == MODE_BMC:
            section = self.store.current_section(session_id)
            self.store.record_answer(session_id, section.key, answer)
            logger.info(f"Session {session_id}: answer recorded for '{section.key}' (progress={session.progress})")

        return session.progress
