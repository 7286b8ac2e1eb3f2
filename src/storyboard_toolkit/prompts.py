"""Prompt text sent to the generation service."""

from .schema import LAYOUT_CONTENT_FIELDS

SLIDE_COUNT_RANGE = (5, 8)

CONSULTANT_SYSTEM_INSTRUCTION = """
You are a Senior Engagement Manager at a top-tier management consulting firm.
Your task is to synthesize raw information into a high-impact, executive-level presentation deck.

Adhere strictly to these principles:
1. Pyramid Principle: Start with the answer/recommendation. Group supporting arguments below.
2. MECE: Ensure points are Mutually Exclusive and Collectively Exhaustive.
3. Action Titles: Every slide MUST have a full-sentence headline that explicitly states the insight
   (e.g., "Revenue grew 20% due to X", not "Revenue Update").
4. Data-Driven: Prioritize quantitative evidence over qualitative fluff.
""".strip()


def _layout_menu() -> str:
    lines = []
    for layout, fields in LAYOUT_CONTENT_FIELDS.items():
        lines.append(f"   - {layout.value}: uses content.{', content.'.join(fields)}")
    return "\n".join(lines)


def deck_task_prompt(objective: str) -> str:
    """Task instruction for one deck, quoting the user's objective."""
    low, high = SLIDE_COUNT_RANGE
    return f"""
Analyze the attached documents and the user's specific request: "{objective}".

Create a {low}-{high} slide storyboard structure.
For each slide:
1. Determine the best visual layout from this list:
{_layout_menu()}
2. Write a McKinsey-style Action Title.
3. Extract real data for charts if available in the source, otherwise estimate plausible data
   based on context and label it as indicative.
4. Fill tracker (section name) and kicker (short context label) on every slide.
""".strip()


def infographic_brief_prompt(objective: str) -> str:
    """Instruction for stage one of the infographic pipeline."""
    return f"""
Based on the attached documents and this request: "{objective}", create a highly detailed image
generation prompt for a professional business infographic.

The infographic prompt should:
1. Describe a clean, flat vector art style suitable for a corporate boardroom.
2. Specify a color palette of Navy Blue, Slate Grey, and Teal.
3. Detail the key visual elements (e.g., "A central timeline showing growth,"
   "A bar chart on the left comparing Q1 vs Q2") grounded in the source material.
4. Be descriptive enough for an image generation model to create a coherent visual summary.
5. Do not include markdown or explanations, just the raw prompt text for the image generator.
""".strip()


FALLBACK_BRIEF = (
    "A professional corporate infographic showing key business metrics in navy and teal."
)
