"""Visual style templates applied to generated lessons.

Each style is a palette plus a few style-specific rules and a small script.
Rendering a style for a topic yields the ``css_content`` / ``js_content``
pair stored on the lesson.
"""

from dataclasses import dataclass


DEFAULT_STYLE = "brown-markdown"

_BASE_CSS = """/* {label} - {topic} */
:root {{
{variables}
}}

body, html {{
  font-family: {font};
  color: var(--text-color);
  background-color: var(--background-color);
  line-height: 1.6;
  margin: 0;
  padding: 0;
}}

h1, h2, h3, h4, h5 {{
  font-family: {heading_font};
  color: var(--primary-color);
  margin-bottom: 1rem;
}}

code {{
  font-family: 'Fira Code', 'Courier New', monospace;
  background-color: var(--code-bg);
  padding: 0.2rem 0.4rem;
  border-radius: 3px;
  font-size: 0.9em;
}}

pre {{
  background-color: var(--code-bg);
  padding: 1rem;
  border-radius: 6px;
  overflow-x: auto;
}}

blockquote {{
  border-left: 4px solid var(--accent-color);
  background-color: var(--info-bg);
  margin: 1rem 0;
  padding: 0.5rem 1rem;
}}

.test-passed {{ color: var(--success-color); }}
.test-failed {{ color: var(--error-color); }}
{extra}"""

_BASE_JS = """// {label} - helpers for {topic}
document.addEventListener('DOMContentLoaded', function() {{
  document.querySelectorAll('.quiz-option').forEach(function(option) {{
    option.addEventListener('click', function() {{
      option.parentElement.querySelectorAll('.quiz-option').forEach(function(other) {{
        other.classList.remove('selected');
      }});
      option.classList.add('selected');
    }});
  }});
{extra}}});
"""


@dataclass(frozen=True)
class LessonStyle:
    name: str
    label: str
    description: str
    palette: dict[str, str]
    font: str
    heading_font: str
    extra_css: str = ""
    extra_js: str = ""

    def render(self, topic: str) -> dict[str, str]:
        """CSS and JS for a lesson about ``topic``."""
        variables = "\n".join(f"  --{key}: {value};" for key, value in self.palette.items())
        css = _BASE_CSS.format(
            label=self.label,
            topic=topic,
            variables=variables,
            font=self.font,
            heading_font=self.heading_font,
            extra=self.extra_css,
        )
        js = _BASE_JS.format(label=self.label, topic=topic, extra=self.extra_js)
        return {"css_content": css, "js_content": js}


STYLES: dict[str, LessonStyle] = {
    style.name: style
    for style in (
        LessonStyle(
            name="brown-markdown",
            label="Brown Markdown",
            description="Relaxed, earthy theme that reads like a well-kept notebook",
            palette={
                "primary-color": "#8B4513",
                "secondary-color": "#A0522D",
                "background-color": "#F5F5DC",
                "text-color": "#3E2723",
                "accent-color": "#D2B48C",
                "code-bg": "#F0E6D2",
                "info-bg": "#E6D9B8",
                "success-color": "#4CAF50",
                "error-color": "#F44336",
            },
            font="'Georgia', serif",
            heading_font="'Bookman', serif",
            extra_js="""  document.querySelectorAll('.collapsible-header').forEach(function(header) {
    header.addEventListener('click', function() {
      header.classList.toggle('open');
      var content = header.nextElementSibling;
      if (content) {
        content.style.display = content.style.display === 'none' ? 'block' : 'none';
      }
    });
  });
""",
        ),
        LessonStyle(
            name="neon-racer",
            label="Neon Racer",
            description="Vibrant, high-energy theme with neon colors and animations",
            palette={
                "primary-color": "#FF00FF",
                "secondary-color": "#00FFFF",
                "background-color": "#0F0F1A",
                "text-color": "#F0F0F0",
                "accent-color": "#FF00AA",
                "code-bg": "#1A1A2E",
                "info-bg": "#1E1E3A",
                "success-color": "#00FF00",
                "error-color": "#FF3333",
            },
            font="'Orbitron', 'Tahoma', sans-serif",
            heading_font="'Orbitron', 'Impact', sans-serif",
            extra_css="""
@keyframes neon-glow {
  0% { text-shadow: 0 0 5px var(--primary-color); }
  50% { text-shadow: 0 0 20px var(--primary-color), 0 0 30px var(--primary-color); }
  100% { text-shadow: 0 0 5px var(--primary-color); }
}

h1, h2 { animation: neon-glow 2s ease-in-out infinite; }
code { border: 1px solid var(--secondary-color); }
""",
            extra_js="""  document.querySelectorAll('pre').forEach(function(block) {
    block.addEventListener('mouseenter', function() { block.classList.add('glow'); });
    block.addEventListener('mouseleave', function() { block.classList.remove('glow'); });
  });
""",
        ),
        LessonStyle(
            name="interaction-galore",
            label="Interaction Galore",
            description="Interactive panels and plenty of clickable components",
            palette={
                "primary-color": "#4285F4",
                "secondary-color": "#34A853",
                "background-color": "#FFFFFF",
                "text-color": "#202124",
                "accent-color": "#FBBC05",
                "code-bg": "#F8F9FA",
                "info-bg": "#E8F0FE",
                "success-color": "#34A853",
                "error-color": "#EA4335",
            },
            font="'Roboto', 'Segoe UI', sans-serif",
            heading_font="'Google Sans', 'Roboto', sans-serif",
            extra_css="""
.panel {
  background-color: var(--code-bg);
  border-radius: 8px;
  box-shadow: 0 1px 3px rgba(60, 64, 67, 0.15);
  padding: 1rem;
  cursor: pointer;
  transition: transform 0.2s ease;
}

.panel:hover { transform: translateY(-2px); }
""",
            extra_js="""  document.querySelectorAll('.panel').forEach(function(panel) {
    panel.addEventListener('click', function() { panel.classList.toggle('expanded'); });
  });
""",
        ),
        LessonStyle(
            name="practical-project",
            label="Practical Project Building",
            description="Progressive project where each slide builds on the previous one",
            palette={
                "primary-color": "#0070F3",
                "secondary-color": "#0366D6",
                "background-color": "#FFFFFF",
                "text-color": "#24292E",
                "accent-color": "#FFC107",
                "code-bg": "#F6F8FA",
                "info-bg": "#F1F8FF",
                "success-color": "#28A745",
                "error-color": "#DC3545",
            },
            font="-apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Helvetica, Arial, sans-serif",
            heading_font="inherit",
            extra_css="""
.project-step {
  border: 1px solid #E1E4E8;
  border-radius: 6px;
  padding: 1rem;
  margin-bottom: 1rem;
}

.project-step.done { border-color: var(--success-color); }
""",
            extra_js="""  document.querySelectorAll('.project-step .step-checkbox').forEach(function(box) {
    box.addEventListener('change', function() {
      box.closest('.project-step').classList.toggle('done', box.checked);
    });
  });
""",
        ),
    )
}


def get_style(name: str | None) -> LessonStyle:
    """Style by name; unknown or missing names fall back to the default style."""
    return STYLES.get(name or DEFAULT_STYLE, STYLES[DEFAULT_STYLE])


def render_style(name: str | None, topic: str) -> dict[str, str]:
    return get_style(name).render(topic)


def style_names() -> list[str]:
    return list(STYLES)
