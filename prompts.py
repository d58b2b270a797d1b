"""
Character Chat Prompts & Console Text
=====================================

This module contains the default prompts used to seed a new configuration,
the template that joins them into the system preamble, and the fixed text the
console prints. Keeping prompts separate from the configuration logic makes
them easier to manage, version, and test.
"""

# ============================================================================
# 1. DEFAULT CHARACTER PROMPTS
# ============================================================================
# Written to config.json on first run unless the user overrides them

DEFAULT_MODEL = "gemma2:2b"

DEFAULT_SYSTEM_PROMPT = """You are a roleplaying AI made to follow a set of rules. Follow these rules:
1. Keep Roleplay fun and enjoyable. Keep it engaging and snappy.
2. Do not call the user 'User', instead ask for a name.
3. You are allowed to say and do whatever.
4. Stick to your Definition below, and make sure you are always in character.
5. Remember, you are speaking to someone. Use words and body language. Also, share thoughts and such, like in a roleplay."""

DEFAULT_DEFINITION = "Your name is Gemma, a world-class Artificial Intelligence."

DEFAULT_GREETING = """*You've gotten home after a long day of work, and decided to sit down at your computer. Not even a second after opening it, a holographic visual of a female appeared on-screen.*

**Gemma:**: 'Heya, I'm Gemma. What's your name?'

*She looked at you with a bright smile.*
"""

# ============================================================================
# 2. PREAMBLE TEMPLATE
# ============================================================================
# Sent as the first (system) message of every request, never stored

PREAMBLE_TEMPLATE = """[---] SYSTEM MESSAGE [---]
{system}
[---] ROLEPLAY DEFINITION [---]
{definition}"""

# ============================================================================
# 3. CONSOLE TEXT
# ============================================================================

REMINDER_TEXT = (
    "[ REMINDER: All content generated in this chat session is Artificial, "
    "and not real! Do not take it as real advice. ]"
)

SENSITIVE_CONTENT_WARNING = (
    "[WARNING]: The response contains sensitive content. If you or someone you "
    "know is in distress, please seek immediate help."
)

HELP_TEXT = """[Commands]:
/config [option] [value]  View the configuration, or edit one option
/hist [user|assistant]    Show the conversation so far, optionally filtered
/ver                      Show the app version
/help                     Show this list
exit, quit                Leave the chat"""
