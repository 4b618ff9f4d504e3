"""
Skill categorization and skills-line rendering.

Categories are data: an ordered list of (key, label, keywords). A skill lands in
the first category with a keyword that occurs in it (case-insensitive
substring match); skills matching nothing land in "other".
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class SkillCategory:
    key: str
    label: str
    keywords: Tuple[str, ...]

    def matches(self, skill: str) -> bool:
        term = skill.lower()
        return any(keyword in term for keyword in self.keywords)


SKILL_CATEGORIES: Tuple[SkillCategory, ...] = (
    SkillCategory(
        "languages",
        "Languages",
        (
            "python", "javascript", "typescript", "java", "c++", "c#", "golang", "rust",
            "ruby", "php", "swift", "kotlin", "scala", "perl", "matlab", "bash", "html", "css",
        ),
    ),
    SkillCategory(
        "frameworks",
        "Frameworks",
        (
            "react", "angular", "vue", "svelte", "next.js", "node", "express", "django",
            "flask", "fastapi", "spring", "rails", "laravel", ".net", "tailwind", "bootstrap",
            "jquery", "tensorflow", "pytorch", "pandas", "numpy",
        ),
    ),
    SkillCategory(
        "databases",
        "Databases",
        (
            "sql", "mongo", "redis", "dynamodb", "cassandra", "oracle", "firebase",
            "elasticsearch", "supabase", "mariadb", "neo4j",
        ),
    ),
    SkillCategory(
        "cloud",
        "Cloud",
        (
            "aws", "azure", "gcp", "google cloud", "heroku", "vercel", "netlify",
            "cloudflare", "lambda", "ec2", "s3",
        ),
    ),
    SkillCategory(
        "tools",
        "Tools",
        (
            "git", "docker", "kubernetes", "jenkins", "jira", "terraform", "ansible",
            "webpack", "vite", "figma", "postman", "linux", "ci/cd", "npm", "vs code",
        ),
    ),
)

OTHER_CATEGORY = SkillCategory("other", "Other", ())

BULLET_SEPARATOR = " • "
COMMA_SEPARATOR = ", "


def categorize_skill(
    skill: str, categories: Sequence[SkillCategory] = SKILL_CATEGORIES
) -> SkillCategory:
    """First category whose keywords match the skill, else OTHER_CATEGORY."""
    for category in categories:
        if category.matches(skill):
            return category
    return OTHER_CATEGORY


def group_skills(
    skills: Sequence[str], categories: Sequence[SkillCategory] = SKILL_CATEGORIES
) -> Dict[str, List[str]]:
    """
    Bucket skills by category, keeping input order within each bucket.

    Returns:
        Label -> skills, in category order with "Other" last; empty buckets omitted

    Examples:
        >>> group_skills(["React", "Python", "Docker", "Notion"])
        {'Languages': ['Python'], 'Frameworks': ['React'], 'Tools': ['Docker'], 'Other': ['Notion']}
    """
    buckets: Dict[str, List[str]] = {c.label: [] for c in (*categories, OTHER_CATEGORY)}
    for skill in skills:
        buckets[categorize_skill(skill, categories).label].append(skill)
    return {label: items for label, items in buckets.items() if items}


def render_skills(
    skills: Sequence[str], display_style: Optional[str], theme_separator: str
) -> List[str]:
    """
    Render skills as display lines.

    Args:
        skills: Skill terms
        display_style: "grouped", "bullets", "comma" - or None when the user has
            never chosen one, in which case the theme's separator is used
        theme_separator: Separator string of the active theme

    Returns:
        One line per category when grouped, otherwise a single line
        (empty list when there are no skills)
    """
    skills = [s for s in skills if s and s.strip()]
    if not skills:
        return []

    if display_style is None:
        return [theme_separator.join(skills)]
    if display_style == "grouped":
        return [f"{label}: {', '.join(items)}" for label, items in group_skills(skills).items()]
    if display_style == "bullets":
        return [BULLET_SEPARATOR.join(skills)]
    return [COMMA_SEPARATOR.join(skills)]
