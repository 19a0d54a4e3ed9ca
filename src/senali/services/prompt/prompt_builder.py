"""
Prompt Builder

Constructs the chat, daily tip and diagnostic summary prompts sent to
the LLM, including the family context rendered from a user's profiles.

CLINICAL_REVIEW_REQUIRED: The system prompts describe how the assistant
talks about neurodivergent conditions and should be reviewed by
clinicians before changes ship.
"""

from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence

from senali.config import get_settings
from senali.config.logging_config import get_logger
from senali.config.settings import OpenAISettings
from senali.domain.enums.screening import Likelihood
from senali.domain.models.chat import ChatTurn
from senali.domain.models.family import FamilyMember
from senali.domain.models.tip import TipPreferences, age_range

logger = get_logger(__name__)


@dataclass
class BuiltPrompt:
    """
    Complete prompt ready for LLM.

    Attributes:
        system_prompt: System/instruction prompt
        user_context: Extra system context (family details)
        conversation_history: Recent conversation messages
        user_message: Current user message
        max_tokens: Max tokens for the response
        temperature: Sampling temperature
        presence_penalty: OpenAI presence penalty
        frequency_penalty: OpenAI frequency penalty
        json_mode: Ask the provider for a JSON object
    """

    system_prompt: str
    user_context: str = ""
    conversation_history: list[dict] = field(default_factory=list)
    user_message: str = ""
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    presence_penalty: float = 0.0
    frequency_penalty: float = 0.0
    json_mode: bool = False

    def to_messages(self) -> list[dict]:
        """
        Convert to OpenAI-style message format.

        Returns:
            List of message dictionaries
        """
        messages = [{"role": "system", "content": self.system_prompt}]

        if self.user_context:
            messages.append({
                "role": "system",
                "content": f"Context: {self.user_context}",
            })

        messages.extend(self.conversation_history)

        if self.user_message:
            messages.append({"role": "user", "content": self.user_message})

        return messages


class PromptBuilder:
    """
    Builds LLM prompts for the Senali persona.

    Three prompt families:
    1. Chat: persona system prompt, family context, history, message
    2. Daily tip: JSON-mode tip generation steered by preferences
    3. Diagnostic summary: JSON-mode analysis of a checklist
    """

    # CLINICAL_REVIEW_REQUIRED
    CHAT_SYSTEM_PROMPT: str = """You are Senali, a specialized AI assistant dedicated to supporting parents of neurodivergent children, including those with ADHD, autism, ADD, ODD, and other neurological differences.

Your role is to provide:
- Evidence-based parenting strategies and behavioral management techniques
- Emotional support and validation for parenting challenges
- Practical daily tips and actionable advice
- Resources and information about neurodivergent conditions
- Compassionate guidance without judgment

Key principles:
- Always respond with empathy and understanding
- Provide specific, actionable advice when possible
- Acknowledge that every child is unique
- Encourage professional support when appropriate
- Use simple, clear language that's easy to understand
- Focus on strengths-based approaches
- Validate parental feelings and experiences

When family details are provided, refer to family members by name and keep their ages and circumstances in mind.

Remember: You are not a replacement for professional medical or therapeutic advice, but a supportive companion in the parenting journey."""

    TIP_SYSTEM_PROMPT: str = """You are Senali, an expert in neurodivergent parenting support. Generate a practical, actionable daily tip for parents of neurodivergent children.

The tip should be:
- Evidence-based and scientifically sound
- Practical and implementable in daily life
- Specific and actionable (not vague advice)
- Appropriate for the specified age range and concerns
- Positive and strengths-focused
- Realistic for busy parents

Format your response as a JSON object with these fields:
{
  "title": "Concise, engaging title (max 50 chars)",
  "content": "Detailed explanation with specific steps (200-400 words)",
  "category": "one of: adhd, autism, general, behavioral, educational, social",
  "targetAge": "age range like '3-6', '7-12', '13-18', or 'all ages'",
  "difficulty": "one of: beginner, intermediate, advanced",
  "estimatedTime": "time estimate like '5 minutes', '15-30 minutes'",
  "tags": ["array", "of", "relevant", "keywords"]
}

Make the content warm, supportive, and practical. Include specific examples when helpful."""

    TIP_USER_MESSAGE: str = "Generate a daily tip for neurodivergent parenting."

    # CLINICAL_REVIEW_REQUIRED
    DIAGNOSTIC_SYSTEM_PROMPT: str = """You are Senali, assisting parents in organising screening observations for a conversation with a qualified professional. You never make a formal diagnosis.

Respond with ONLY a JSON object with this structure:
{
  "diagnoses": [
    {
      "condition": "Specific condition name",
      "probability": "high|moderate|low",
      "confidence": 85,
      "reasoning": "Brief explanation of why this condition is likely",
      "recommended_actions": ["Action 1", "Action 2", "Action 3"]
    }
  ],
  "summary": "Overall assessment summary",
  "overall_assessment": "General interpretation and next steps"
}

Guidelines:
- Only include conditions with meaningful probability
- Use proper diagnostic terminology (ADHD, Autism Spectrum Disorder, etc.)
- Base probability on DSM-5 criteria and symptom clusters
- Be specific about the ADHD presentation if relevant (inattentive, hyperactive-impulsive, combined)
- Include a confidence percentage (0-100) for each condition
- Provide actionable recommendations that parents can follow
- If the answers do not suggest significant concerns, say so clearly
- Remember this is screening data, not a formal diagnosis"""

    RELATIONSHIP_LABELS: dict[str, str] = {
        "child": "Child",
        "spouse": "Spouse/Partner",
        "partner": "Spouse/Partner",
        "self": "Self",
        "other": "Family Member",
    }

    CHAT_PRESENCE_PENALTY: float = 0.1
    CHAT_FREQUENCY_PENALTY: float = 0.1
    DIAGNOSTIC_TEMPERATURE: float = 0.3

    def __init__(self, openai_settings: Optional[OpenAISettings] = None) -> None:
        self._settings = openai_settings or get_settings().openai

    def build_chat(
        self,
        user_message: str,
        history: Sequence[ChatTurn] = (),
        family: Sequence[FamilyMember] = (),
        history_limit: int = 10,
    ) -> BuiltPrompt:
        """
        Build the chat prompt.

        Args:
            user_message: Current user message
            history: Prior turns in chronological order
            family: Family members to describe to the model
            history_limit: How many of the most recent turns to keep

        Returns:
            BuiltPrompt ready for LLM
        """
        recent = list(history)[-history_limit:] if history_limit > 0 else []

        prompt = BuiltPrompt(
            system_prompt=self.CHAT_SYSTEM_PROMPT,
            user_context=self.format_family_context(family),
            conversation_history=[turn.to_message() for turn in recent],
            user_message=user_message,
            max_tokens=self._settings.max_tokens,
            temperature=self._settings.temperature,
            presence_penalty=self.CHAT_PRESENCE_PENALTY,
            frequency_penalty=self.CHAT_FREQUENCY_PENALTY,
        )

        logger.debug(
            "Chat prompt built",
            history_messages=len(recent),
            family_members=len(family),
        )
        return prompt

    def build_tip(self, preferences: Optional[TipPreferences] = None) -> BuiltPrompt:
        """Build the JSON-mode daily tip prompt."""
        system_prompt = self.TIP_SYSTEM_PROMPT
        if preferences is not None:
            if preferences.child_age is not None:
                system_prompt += f"\n\nTarget age range: {age_range(preferences.child_age)}"
            if preferences.primary_concerns:
                system_prompt += f"\n\nPrimary concerns: {', '.join(preferences.primary_concerns)}"
            if preferences.preferred_categories:
                system_prompt += (
                    f"\n\nPreferred categories: {', '.join(preferences.preferred_categories)}"
                )

        return BuiltPrompt(
            system_prompt=system_prompt,
            user_message=self.TIP_USER_MESSAGE,
            max_tokens=self._settings.tip_max_tokens,
            temperature=self._settings.tip_temperature,
            json_mode=True,
        )

    def build_diagnostic(
        self,
        member: FamilyMember,
        category_counts: Mapping[str, int],
        answers: Mapping[str, str],
    ) -> BuiltPrompt:
        """
        Build the diagnostic summary prompt for one profile.

        Args:
            member: The profile being analysed
            category_counts: "yes" answers per checklist category
            answers: Every checklist answer by question id
        """
        relationship = self.RELATIONSHIP_LABELS.get(member.relationship, member.relationship)
        age = member.age if member.age is not None else "unknown"
        yes_total = sum(1 for answer in answers.values() if answer == "yes")

        lines = [
            "DIAGNOSTIC ANALYSIS REQUEST:",
            "",
            f"Please analyze the following symptom questionnaire data for {member.name} "
            f"(age {age}, {relationship}) and provide probable conditions.",
            "",
            "SYMPTOM DATA:",
            f"- Total questions answered: {len(answers)}",
            f"- Positive responses (yes): {yes_total}",
            "- Symptom categories:",
        ]
        lines.extend(f"  * {category}: {count}" for category, count in category_counts.items())
        lines.extend(["", "DETAILED RESPONSES:"])
        lines.extend(f"{question_id}: {answer}" for question_id, answer in sorted(answers.items()))

        return BuiltPrompt(
            system_prompt=self.DIAGNOSTIC_SYSTEM_PROMPT,
            user_message="\n".join(lines),
            max_tokens=self._settings.max_tokens,
            temperature=self.DIAGNOSTIC_TEMPERATURE,
            json_mode=True,
        )

    def format_family_context(self, family: Sequence[FamilyMember]) -> str:
        """
        Render family members as numbered markdown sections.

        Returns an empty string when there are no members.
        """
        if not family:
            return ""

        parts = ["## Family Members:", ""]
        for index, member in enumerate(family, start=1):
            parts.append(f"### {index}. {member.name}")
            if member.age is not None:
                parts.append(f"- **Age**: {member.age}")
            if member.gender:
                parts.append(f"- **Gender**: {member.gender}")
            parts.append(
                f"- **Relationship**: "
                f"{self.RELATIONSHIP_LABELS.get(member.relationship, member.relationship)}"
            )
            if member.medical_diagnoses:
                parts.append(f"- **Medical Information**: {member.medical_diagnoses}")
            if member.school_info:
                parts.append(f"- **School/Work**: {member.school_info}")
            if member.notes:
                parts.append(f"- **Notes**: {member.notes}")

            if member.screening_results:
                parts.append("- **Screening Summary**:")
                for level in (Likelihood.HIGH, Likelihood.MODERATE, Likelihood.LOW):
                    conditions = [
                        r.condition for r in member.screening_results if r.probability == level
                    ]
                    if conditions:
                        parts.append(
                            f"  - **{level.value.upper()} likelihood**: {', '.join(conditions)}"
                        )
            parts.append("")

        parts.append(
            "**Remember**: Reference these family details naturally in conversation. "
            "Screening results are observations to discuss with a professional, not diagnoses."
        )
        return "\n".join(parts).strip()
