"""
Built-in example prompts offered as quick-start input.
"""

from typing import List, Optional, Tuple

from creative_studio.models import ExamplePrompt, ProjectType


EXAMPLE_PROMPTS: Tuple[ExamplePrompt, ...] = (
    ExamplePrompt(
        title="Space Invaders Clone",
        description=(
            "Create a classic space invaders game with moving enemies, shooting "
            "mechanics, and score tracking. Use colorful pixel art style."
        ),
        prompt=(
            "Create a classic space invaders game with moving enemies, shooting "
            "mechanics, and score tracking. Use colorful pixel art style. Include "
            "player spaceship controls, enemy waves, collision detection, and a "
            "scoring system."
        ),
        project_type=ProjectType.GAME,
        icon="🎮",
    ),
    ExamplePrompt(
        title="Memory Card Game",
        description=(
            "Create a memory card matching game with flip animations, timer, and "
            "difficulty levels. Use modern card design with smooth transitions."
        ),
        prompt=(
            "Create a memory card matching game with flip animations, timer, and "
            "difficulty levels. Use modern card design with smooth transitions. "
            "Include card shuffling, match detection, and win conditions."
        ),
        project_type=ProjectType.GAME,
        icon="🎯",
    ),
    ExamplePrompt(
        title="Portfolio Website",
        description=(
            "Build a modern portfolio website with dark theme, smooth animations, "
            "and responsive design for showcasing web development projects."
        ),
        prompt=(
            "Build a modern portfolio website with dark theme, smooth animations, "
            "and responsive design for showcasing web development projects. "
            "Include hero section, skills, projects gallery, and contact form."
        ),
        project_type=ProjectType.WEBSITE,
        icon="🌐",
    ),
    ExamplePrompt(
        title="E-commerce Landing",
        description=(
            "Design a product landing page with hero section, features grid, "
            "testimonials, and call-to-action. Modern and conversion-focused."
        ),
        prompt=(
            "Design a product landing page with hero section, features grid, "
            "testimonials, and call-to-action. Modern and conversion-focused. "
            "Include responsive design, gradient backgrounds, and smooth scrolling."
        ),
        project_type=ProjectType.WEBSITE,
        icon="🏪",
    ),
)


def examples_for(project_type: Optional[ProjectType] = None) -> List[ExamplePrompt]:
    """Return the catalog, optionally filtered by project type."""
    if project_type is None:
        return list(EXAMPLE_PROMPTS)
    return [example for example in EXAMPLE_PROMPTS if example.project_type == project_type]


def get_example(title: str) -> ExamplePrompt:
    """
    Look up an example by title (case-insensitive).

    Args:
        title: Example title.

    Returns:
        Matching ExamplePrompt.
    """
    for example in EXAMPLE_PROMPTS:
        if example.title.lower() == title.strip().lower():
            return example
    raise ValueError(f"Unknown example: {title}")
