# ===========================================
# COMMON COMPONENTS
# ===========================================

# Shared output rules for every report summary
SUMMARY_OUTPUT_RULES = """
**Output Rules**
- Write plain prose in short paragraphs; bullet points are allowed for lists of accounts.
- Do not invent accounts, contacts or outcomes that are not in the data.
- Keep the summary under 250 words.
"""

# ===========================================
# DAILY ACTIVITY SUMMARY
# ===========================================

DAILY_ACTIVITY_ROW_TEMPLATE = (
    "On {date}, they worked on account '{account_name}' (Contact: {contact_person}). "
    "The task was '{work_done}' with the outcome being '{outcome}'. "
    "Support required: '{support_required}'"
)

DAILY_ACTIVITY_SUMMARY_PROMPT = (
    """
You are an expert sales performance analyst. Based on the following activity report for sales person {full_name}, provide a concise summary.

Highlight:
1. The accounts worked on and the overall volume of activity
2. Notable outcomes and deals progressed
3. Recurring blockers or support requests that a manager should act on
"""
    + SUMMARY_OUTPUT_RULES
    + """
Activity Data:
{report_text}
"""
)

# ===========================================
# WEEKLY PLAN SUMMARY
# ===========================================

WEEKLY_PLAN_ROW_TEMPLATE = (
    "On {date} ({day}), they plan to engage customer '{customer_name}' "
    "(Contacts: {contact_persons}). Requirement: '{requirement}'. "
    "Proposed action: '{proposed_action}'. Planning required: '{planning_required}'. "
    "Support required: '{support_required}'"
)

WEEKLY_PLAN_SUMMARY_PROMPT = (
    """
You are an expert sales performance analyst. Based on the following weekly plan for sales person {full_name}, provide a concise summary.

Highlight:
1. The customers targeted and the requirements behind each engagement
2. Which proposed actions look most likely to move deals forward
3. Planning gaps or support requests that a manager should resolve before the week starts
"""
    + SUMMARY_OUTPUT_RULES
    + """
Plan Data:
{report_text}
"""
)
