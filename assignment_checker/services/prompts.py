"""
Analysis Prompt Templates
=========================
The evaluation prompt sent to the model together with the assignment text.

The active template is part of the contract with the model: change it only
deliberately, since every stored analysis was produced against this exact text.
"""

PLACEHOLDER = "{assignment_text}"

# 7-criterion scored rubric (active)
ANALYSIS_PROMPT_TEMPLATE = """You are an expert instructional designer helping an educator understand how easily an assignment prompt could be completed by generative AI tools such as ChatGPT or Gemini.

Evaluate the assignment below against the following 7 criteria. Score each criterion from 1 (highly vulnerable to AI) to 5 (highly AI-resistant) and justify every score in one or two sentences that cite specific wording from the assignment.

1. **Personal Connection** - Does the task require personal experience, reflection, or local context an AI cannot know?
2. **Process Evidence** - Must students show drafts, notes, checkpoints, or other evidence of their working process?
3. **Higher-Order Thinking** - Does it demand analysis, evaluation, or creation rather than recall or summary?
4. **Specificity of Sources** - Does it depend on class-specific materials, discussions, or data that are not publicly available?
5. **Multimodal Output** - Does it require non-text artifacts (presentations, recordings, diagrams, physical work)?
6. **In-Class Component** - Is any part completed or defended live (presentation, oral check, in-class writing)?
7. **Originality of Prompt** - Is the prompt novel, or is it a common topic with many existing answers online?

Format your response in Markdown with exactly these sections:

## Overall AI Vulnerability
State the total score out of 35 and a risk level: Low (29-35), Medium (22-28), High (15-21), or Critical (7-14).

## Criterion Scores
A table with the columns Criterion, Score (1-5), and Justification.

## Key Weaknesses
A bulleted list of the specific features that make the assignment easy to complete with AI.

## Recommended Improvements
Exactly 3 numbered, actionable changes that would make the assignment more AI-resistant while preserving its learning goals.

Assignment:
\"\"\"
{assignment_text}
\"\"\"
"""

# Aggregate 1-10 scale (alternative)
AGGREGATE_PROMPT_TEMPLATE = """Analyze this assignment for AI vulnerability. Rate how easily it could be completed by generative AI on a scale from 1 (very difficult) to 10 (trivial), rate the risk (Low/Medium/High/Critical), identify specific weaknesses, and provide 3 actionable improvements to make it AI-resistant. Respond in Markdown.

{assignment_text}
"""


def build_prompt(assignment_text, template=ANALYSIS_PROMPT_TEMPLATE):
    """
    Embed the assignment text at the template's single substitution point.

    Raises:
        ValueError: if the assignment text is empty or whitespace only.
    """
    if not assignment_text or not assignment_text.strip():
        raise ValueError("Assignment text is empty")
    return template.replace(PLACEHOLDER, assignment_text, 1)
