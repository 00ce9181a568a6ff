"""Turn an app idea into the TaskContext and ProjectInfo for one stage."""

from prompt_pipeline.models import ProjectInfo, PromptStage, TaskContext, ToolProfile

STAGE_TASK_TYPES = {
    PromptStage.APP_SKELETON: "app_architecture",
    PromptStage.PAGE_UI: "ui_development",
    PromptStage.FLOW_CONNECTIONS: "navigation_flow",
}
DEFAULT_TASK_TYPE = "feature_development"

DESIGN_STYLE_REQUIREMENTS = {
    "minimal": ("Clean, minimal design", "Plenty of whitespace", "Simple color palette"),
    "playful": ("Vibrant colors", "Engaging animations", "Fun, interactive elements"),
    "business": ("Professional appearance", "Corporate color scheme", "Formal typography"),
}

COMPLEXITY_REQUIREMENTS = {
    "complex": ("Scalable architecture", "Performance optimization"),
    "medium": ("Modular code structure", "Error handling"),
    "simple": ("Simple, clean code structure",),
}

EXPERIENCE_REQUIREMENTS = {
    "beginner": ("Clear, well-commented code", "Step-by-step implementation guide"),
    "advanced": ("Advanced patterns and optimizations",),
}

TASK_SUGGESTIONS = {
    "web_app": [
        "project kickoff",
        "authentication setup",
        "dashboard creation",
        "responsive design",
        "API integration",
    ],
    "mobile_app": [
        "mobile-first design",
        "touch interactions",
        "offline functionality",
        "push notifications",
    ],
    "ecommerce": [
        "product catalog",
        "shopping cart",
        "payment integration",
        "order management",
    ],
    "blog": [
        "content management",
        "blog layout",
        "SEO optimization",
        "commenting system",
    ],
}


def task_type_for_stage(stage: PromptStage) -> str:
    return STAGE_TASK_TYPES.get(stage, DEFAULT_TASK_TYPE)


def technical_requirements(app_idea: dict) -> list[str]:
    platforms = app_idea.get("platforms") or []
    requirements = []

    if "web" in platforms:
        requirements += ["Web application development", "Responsive design"]
    if "mobile" in platforms:
        requirements += ["Mobile-responsive design", "Touch-friendly interfaces"]

    requirements += COMPLEXITY_REQUIREMENTS.get(app_idea.get("project_complexity"), ())
    requirements += EXPERIENCE_REQUIREMENTS.get(app_idea.get("technical_experience"), ())
    return requirements


def ui_requirements(app_idea: dict) -> list[str]:
    requirements = list(DESIGN_STYLE_REQUIREMENTS.get(app_idea.get("design_style"), ()))

    if app_idea.get("style_description"):
        requirements.append(f"Style preference: {app_idea['style_description']}")
    if "mobile" in (app_idea.get("platforms") or []):
        requirements.append("Mobile-first responsive design")
    return requirements


def constraints(app_idea: dict, profile: ToolProfile) -> list[str]:
    result = list(profile.constraints)
    platforms = app_idea.get("platforms") or []

    if list(platforms) == ["web"]:
        result.append("Web-only implementation")
    if app_idea.get("technical_experience") == "beginner":
        result.append("Avoid overly complex patterns")
    if app_idea.get("project_complexity") == "simple":
        result.append("Keep architecture simple")
    return result


def tech_stack(app_idea: dict, profile: ToolProfile) -> list[str]:
    stack = list(profile.tech_stack)
    if "web" in (app_idea.get("platforms") or []):
        stack += [tech for tech in ("HTML5", "CSS3") if tech not in stack]
    return stack


def build_task_context(
    app_idea: dict,
    stage: PromptStage,
    profile: ToolProfile,
) -> tuple[TaskContext, ProjectInfo]:
    """Build the request objects for one stage of an app idea.

    Args:
        app_idea: Dict with `app_name` and `idea_description`, and optionally
            `platforms`, `design_style`, `style_description`,
            `target_audience`, `project_complexity`, `technical_experience`
        stage: Stage to generate a prompt for
        profile: Profile of the target tool

    Raises:
        ValueError: If the app name or description is missing
    """
    name = (app_idea.get("app_name") or "").strip()
    description = (app_idea.get("idea_description") or "").strip()
    if not name or not description:
        raise ValueError("App name and description are required")

    technical = technical_requirements(app_idea)
    ui = ui_requirements(app_idea)
    task = TaskContext(
        task_type=task_type_for_stage(stage),
        project_name=name,
        description=description,
        stage=stage,
        target_tool=profile.tool_id,
        technical_requirements=technical,
        ui_requirements=ui,
        constraints=constraints(app_idea, profile),
    )
    project = ProjectInfo(
        name=name,
        description=description,
        tech_stack=tech_stack(app_idea, profile),
        target_audience=app_idea.get("target_audience") or "General users",
        requirements=technical + ui,
        complexity_level=app_idea.get("project_complexity") or "medium",
    )
    return task, project


def task_suggestions(project_type: str) -> list[str]:
    """Typical tasks for a kind of project; unknown kinds get the web app list."""
    return list(TASK_SUGGESTIONS.get(project_type, TASK_SUGGESTIONS["web_app"]))
