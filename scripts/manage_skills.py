#!/usr/bin/env python3
"""
Command-line interface for the skills inventory.

Commands:
    resume  - Extract skills from a resume file (.pdf, .txt, .md)
    extract - Show the skills found in a piece of text (no changes saved)
    add     - Add a skill by hand
    delete  - Delete a skill
    list    - List resume-declared and learned skills
    new     - Learned skills missing from the resume
"""

from pathlib import Path
from typing import Optional

import typer

from deskmate.contexts.skills import (
    create_skill,
    delete_skill,
    extract,
    load_vocabulary,
    new_skills,
    save_resume_skills,
)
from deskmate.contexts.storage import JsonDocumentRepository
from deskmate.utils.resume_text import read_resume_text
from deskmate.utils.timestamp import format_timestamp
from deskmate.utils.validation import ValidationError

app = typer.Typer(
    add_completion=False,
    help="Manage the skills inventory",
    invoke_without_command=True,
)

DATA_FILE_OPTION = typer.Option(
    None, "--data-file", "-d", help="Document path (default: DESKMATE_DATA_FILE)"
)
VOCABULARY_OPTION = typer.Option(
    None, "--vocabulary", "-v", help="Vocabulary YAML (default: SKILL_VOCABULARY_PATH)"
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _load_vocabulary(path: Optional[Path]):
    try:
        return load_vocabulary(path)
    except (FileNotFoundError, ValueError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command("resume")
def resume_command(
    resume_file: Path = typer.Argument(..., help="Resume file (.pdf, .txt or .md)"),
    vocabulary: Optional[Path] = VOCABULARY_OPTION,
    data_file: Optional[Path] = DATA_FILE_OPTION,
):
    """
    Replace the resume-declared skills with those found in a resume.

    Examples:\n

        $ manage_skills.py resume ~/Documents/resume.pdf

        $ manage_skills.py resume resume.txt -v my_vocabulary.yaml
    """
    try:
        text = read_resume_text(resume_file)
    except (FileNotFoundError, ValueError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    found = save_resume_skills(
        JsonDocumentRepository(data_file), text, vocabulary=_load_vocabulary(vocabulary)
    )

    typer.secho(f"✓ Found {len(found)} skill(s) in {resume_file.name}", fg=typer.colors.GREEN)
    for name in sorted(found):
        typer.echo(f"  • {name}")


@app.command("extract")
def extract_command(
    text: str = typer.Argument(..., help="Text to scan"),
    vocabulary: Optional[Path] = VOCABULARY_OPTION,
):
    """
    Show the skills mentioned in text without saving anything.

    Examples:\n

        $ manage_skills.py extract "Finished the React and nodejs assignment"
    """
    found = extract(text, _load_vocabulary(vocabulary))
    if not found:
        typer.secho("No skills found", fg=typer.colors.YELLOW)
        return
    typer.echo(", ".join(sorted(found)))


@app.command("add")
def add_command(
    name: str = typer.Argument(..., help="Skill name"),
    level: str = typer.Option(
        "beginner", "--level", "-l", help="beginner, intermediate, advanced or expert"
    ),
    data_file: Optional[Path] = DATA_FILE_OPTION,
):
    """
    Add a skill by hand.

    Examples:\n

        $ manage_skills.py add Docker --level intermediate
    """
    try:
        record = create_skill(JsonDocumentRepository(data_file), name, level)
    except ValidationError as e:
        typer.secho(f"Error: {e.message}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"✓ {record['name']} ({record['id'][:8]})", fg=typer.colors.GREEN)


@app.command("delete")
def delete_command(
    skill_id: str = typer.Argument(..., help="Skill id (a unique prefix is enough)"),
    data_file: Optional[Path] = DATA_FILE_OPTION,
):
    """
    Delete a skill from either collection.

    Examples:\n

        $ manage_skills.py delete 3c1a
    """
    repo = JsonDocumentRepository(data_file)
    document = repo.get()
    matches = [
        s["id"]
        for key in ("learnedSkills", "resumeSkills")
        for s in document[key]
        if s.get("id", "").startswith(skill_id)
    ]
    if len(matches) != 1:
        typer.secho(
            f"Skill id '{skill_id}' matches {len(matches)} skills", fg=typer.colors.RED, err=True
        )
        raise typer.Exit(code=1)

    delete_skill(repo, matches[0])
    typer.secho(f"✓ Deleted skill {matches[0][:8]}", fg=typer.colors.GREEN)


@app.command("list")
def list_command(data_file: Optional[Path] = DATA_FILE_OPTION):
    """
    List resume-declared and learned skills.

    Examples:\n

        $ manage_skills.py list
    """
    document = JsonDocumentRepository(data_file).get()

    for title, key in (("Resume skills", "resumeSkills"), ("Learned skills", "learnedSkills")):
        typer.secho(f"\n{title}:", fg=typer.colors.BLUE, bold=True)
        records = document[key]
        if not records:
            typer.echo("  (none)")
            continue
        for record in records:
            level = record.get("level") or ""
            added = format_timestamp(record.get("addedAt", ""), relative=True)
            typer.echo(f"  {record['id'][:8]}  {record['name']:25} {level:13} {added}")


@app.command("new")
def new_command(data_file: Optional[Path] = DATA_FILE_OPTION):
    """
    Show learned skills that the resume does not mention yet.

    Examples:\n

        $ manage_skills.py new
    """
    names = new_skills(JsonDocumentRepository(data_file).get())

    typer.secho("\nSkills to add to your resume:", fg=typer.colors.BLUE, bold=True)
    if not names:
        typer.echo("  (none)")
        return
    for name in names:
        typer.secho(f"  + {name}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
