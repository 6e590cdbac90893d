"""
LLM integration layer.

Responsibilities:
- Manage Gemini API configuration and credentials.
- Build prompts from user messages and menu rows.
- Call the Gemini ``generateContent`` endpoint and return the completion text.
"""
