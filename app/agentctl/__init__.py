"""agentctl - Install and configure AI coding assistant CLIs.

Manages installation of Claude Code, Codex and Gemini CLI binaries and
keeps named API provider profiles for each of them.
"""

__version__ = "0.1.0"
