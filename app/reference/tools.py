# app/reference/tools.py
from dataclasses import dataclass
from typing import List, Optional

TOOL_CATEGORIES = ("design", "writing", "coding", "productivity")


@dataclass(frozen=True)
class AffiliateTool:
    id: str
    name: str
    description: str
    logo_url: str
    category: str
    affiliate_link: str
    bonus: int  # SkillCoins


AFFILIATE_TOOLS: List[AffiliateTool] = [
    AffiliateTool(
        id="1",
        name="Canva Pro",
        description="Create stunning designs with drag-and-drop simplicity. Perfect for presentations, social media, and marketing materials.",
        logo_url="https://logo.clearbit.com/canva.com",
        category="design",
        affiliate_link="https://canva.com?ref=skillswitch",
        bonus=50,
    ),
    AffiliateTool(
        id="2",
        name="Grammarly Premium",
        description="AI-powered writing assistant that helps you write flawlessly. Check grammar, spelling, and enhance clarity.",
        logo_url="https://logo.clearbit.com/grammarly.com",
        category="writing",
        affiliate_link="https://grammarly.com?ref=skillswitch",
        bonus=40,
    ),
    AffiliateTool(
        id="3",
        name="GitHub Copilot",
        description="AI pair programmer that suggests code and entire functions in real time.",
        logo_url="https://logo.clearbit.com/github.com",
        category="coding",
        affiliate_link="https://github.com/features/copilot?ref=skillswitch",
        bonus=60,
    ),
    AffiliateTool(
        id="4",
        name="Figma",
        description="Collaborative interface design tool for wireframes, prototypes and design systems.",
        logo_url="https://logo.clearbit.com/figma.com",
        category="design",
        affiliate_link="https://figma.com?via=skillswitch",
        bonus=45,
    ),
    AffiliateTool(
        id="5",
        name="Notion",
        description="All-in-one workspace for notes, tasks, wikis and study planning.",
        logo_url="https://logo.clearbit.com/notion.so",
        category="productivity",
        affiliate_link="https://notion.so?ref=skillswitch",
        bonus=35,
    ),
    AffiliateTool(
        id="6",
        name="Replit",
        description="Code, run and share projects from the browser in dozens of languages.",
        logo_url="https://logo.clearbit.com/replit.com",
        category="coding",
        affiliate_link="https://replit.com?ref=skillswitch",
        bonus=40,
    ),
]


def get_tool(tool_id: str) -> Optional[AffiliateTool]:
    for tool in AFFILIATE_TOOLS:
        if tool.id == tool_id:
            return tool
    return None
