from __future__ import annotations

from typing import Any, Dict, List, Sequence

from .stats import StatValue, is_number, is_unavailable

PERCENT_STATS = frozenset({"CritChance", "EvadeChance"})

TABLE_COLUMNS = ("Label", "Class", "Rarity", "CommunityRanking", "HP", "Damage", "Cooldown")

DETAIL_STATS = (
    "HP",
    "Damage",
    "Cooldown",
    "CritChance",
    "CritDamage",
    "Accuracy",
    "EvadeChance",
    "Distance",
    "Knockback",
)

EXTRA_FIELDS = (
    ("Attack Effect", "AttackEffect"),
    ("Attack Effect Type", "AttackEffectType"),
    ("Attack Effect Lifesteal", "AttackEffectLifesteal"),
    ("Attack Effect Key", "AttackEffectKey"),
    ("Shadow Step Distance", "ShadowStepDistance"),
    ("Shadow Step Cooldown", "ShadowStepCooldown"),
    ("HP Offset", "HPOffset"),
)


def format_stat(key: str, value: StatValue) -> str:
    if is_unavailable(value):
        return "N/A"
    if is_number(value):
        if key in PERCENT_STATS:
            return f"{value * 100:.2f}%"
        if key == "CommunityRanking":
            return f"{value:g}"
        return f"{value:.2f}"
    return str(value)


def render_units_table(rows: Sequence[Dict[str, Any]]) -> str:
    if not rows:
        return "No units match the current filters."

    table: List[List[str]] = [list(TABLE_COLUMNS)]
    for row in rows:
        stats = row["stats"]
        cells = []
        for col in TABLE_COLUMNS:
            value = row.get("community_ranking") if col == "CommunityRanking" else stats.get(col)
            cells.append(format_stat(col, value if value is not None else ""))
        table.append(cells)

    widths = [max(len(r[i]) for r in table) for i in range(len(TABLE_COLUMNS))]
    lines = ["  ".join(c.ljust(w) for c, w in zip(r, widths)).rstrip() for r in table]
    lines.insert(1, "  ".join("-" * w for w in widths))
    return "\n".join(lines)


def _stat_lines(bag: Any) -> List[str]:
    return [f"  {key}: {format_stat(key, bag.get(key, ''))}" for key in DETAIL_STATS if key in bag]


def render_unit_details(report: Dict[str, Any]) -> str:
    base = report["base"]
    lines = [f"{report.get('label')} Details"]
    lines.append(f"Class: {report.get('class')} | Rarity: {report.get('rarity')}")
    price = report.get("price")
    xp = report.get("xp")
    if price is not None or xp is not None:
        lines.append(f"Price: {price if price is not None else 'N/A'} | XP: {xp if xp is not None else 'N/A'}")
    for title, key in EXTRA_FIELDS:
        if key in base:
            lines.append(f"{title}: {format_stat(key, base[key])}")
    lines.append("")

    lines.append("Base Stats")
    lines.extend(_stat_lines(base))

    modified = report.get("modified")
    if modified is not None:
        lines.append("")
        lines.append(f"Modified Stats (level {report.get('level')})")
        lines.extend(_stat_lines(modified))
        for key in ("AttackEffect", "AttackEffectLifesteal"):
            if key in modified and modified[key] != base.get(key):
                lines.append(f"  {key}: {format_stat(key, modified[key])}")
        mods = report.get("mods") or []
        if mods:
            lines.append("  mods: " + ", ".join(m["label"] for m in mods))

    return "\n".join(lines)


def render_mods(groups: Sequence[Any]) -> str:
    if not groups:
        return "No mods loaded."
    lines: List[str] = []
    for rarity, mods in groups:
        lines.append(f"{rarity} Mods")
        for m in mods:
            desc = f" ({m.description})" if m.description else ""
            lines.append(f"- {m.id}: {m.label}{desc}")
    return "\n".join(lines)
