"""
Sales Activity Reports Services Package - Authentication, access control and reporting.

Core Services:
- authenticator: Credential verification, token issuance, initial admin provisioning
- permission_graph & access_control: Who may read or change which reports
- user_service: Registration, cascading deletion, orphan reconciliation
- report_service: Daily activity and weekly plan storage behind the access rules
- summary_service: AI prose summaries of a user's reports
- llm_service & llm_interface: Multi-provider LLM abstraction and management
"""
