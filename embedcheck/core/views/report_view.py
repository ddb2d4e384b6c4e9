"""
Report views for validation results.

Two renderings of the same CheckResult: list markup for a web editor and
a discord.Embed for posting the report back into a channel.
"""

from html import escape

import discord

from embedcheck.contracts.check_result import CheckResult
from embedcheck.contracts.embed import EMBED_LIMITS

VALID_COLOR = 0x2ECC71
INVALID_COLOR = 0xE74C3C


def render_list_items(messages: list[str]) -> str:
    """Render messages as newline-joined ``<li>`` items, HTML-escaped."""
    return "\n".join(f"<li>{escape(text)}</li>" for text in messages)


def render_report_lines(result: CheckResult | None) -> dict[str, str]:
    """Markup for the editor's status area.

    ``None`` is the blank-input state: status without an icon and empty lists.
    """
    if result is None:
        return {"valid": "Valid:", "warnings": "", "errors": ""}

    icon = "ok" if result.is_valid else "error"
    return {
        "valid": f'Valid: <img id="valid-icon" src="{icon}.svg">',
        "warnings": render_list_items(result.warnings),
        "errors": render_list_items(result.errors),
    }


def _bullet_block(messages: list[str], limit: int) -> str:
    lines: list[str] = []
    used = 0
    for index, text in enumerate(messages):
        line = f"• {text}"
        remaining = len(messages) - index
        if used + len(line) + 1 > limit - 16:
            lines.append(f"… and {remaining} more")
            break
        lines.append(line)
        used += len(line) + 1
    return "\n".join(lines)


def render_report_embed(result: CheckResult, *, source_title: str | None = None) -> discord.Embed:
    """Build a chat embed summarising a validation report."""
    if result.is_valid:
        title = "✅ Embed is valid"
        color = VALID_COLOR
    else:
        title = "❌ Embed has errors"
        color = INVALID_COLOR

    description = None
    if source_title:
        description = f"Checked: **{source_title}**"[: EMBED_LIMITS["description"]]

    embed = discord.Embed(title=title, description=description, color=color)

    if result.errors:
        embed.add_field(
            name=f"Errors ({len(result.errors)})",
            value=_bullet_block(result.errors, EMBED_LIMITS["field_value"]),
            inline=False,
        )
    if result.warnings:
        embed.add_field(
            name=f"Warnings ({len(result.warnings)})",
            value=_bullet_block(result.warnings, EMBED_LIMITS["field_value"]),
            inline=False,
        )

    embed.set_footer(text=f"{len(result.errors)} error(s) | {len(result.warnings)} warning(s)")
    return embed
