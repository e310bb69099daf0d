"""Setup configuration for firetasks"""

from setuptools import setup, find_packages

setup(
    name="backlog-fire-tasks",
    version="0.1.0",
    description=(
        "Backlog task dashboard: classifies issues by due-date urgency "
        "(overdue, due tomorrow) with project/assignee filtering."
    ),
    author="Backlog Fire Tasks Contributors",
    author_email="",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "requests>=2.28.0",
        "pytz>=2023.3",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "black>=22.0",
            "flake8>=4.0",
            "mypy>=0.950",
        ],
    },
    entry_points={
        "console_scripts": [
            "backlog-fire-tasks=firetasks.main:main",
        ],
    },
)
