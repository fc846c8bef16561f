# Services package init
"""
StickyBoard Backend — Services Layer
=====================================

What:  Business logic between the routes (HTTP) and the database.
How:   Each service is a stateless singleton whose methods take the request's
       AsyncSession and return response schemas.

Service Inventory:
    - AccountService: account registration and listing
    - GroupService: groups, owner/member roles, join upsert
    - NoteService: posting, listing, editing, moving and clearing notes
    - SummaryService: the summarize page (store and read summaries)
    - LLMService (abstract) / GeminiService: text summarization via Google Gemini
"""
