"""Body profile used by the BMI/BMR charts."""

from __future__ import annotations

from dataclasses import asdict
from typing import Optional

import typer

from fit_cli.commands.common import get_state, print_json_payload
from fit_cli.core.config import save_config
from fit_cli.core.models import UserProfile

app = typer.Typer(help="Height, age and gender for BMI/BMR")

GENDERS = {"male": 0, "female": 1, "0": 0, "1": 1}


@app.command("set")
def set_command(
    ctx: typer.Context,
    height_cm: Optional[float] = typer.Option(None, "--height", help="Height in cm"),
    age: Optional[int] = typer.Option(None, help="Age in years"),
    gender: Optional[str] = typer.Option(None, help="male|female"),
) -> None:
    """Update the profile section of the config file."""
    state = get_state(ctx)
    profile = dict(state.config.get("profile", {}))
    if height_cm is not None:
        if height_cm <= 0:
            raise typer.BadParameter("height must be positive")
        profile["height_cm"] = height_cm
    if age is not None:
        if age <= 0:
            raise typer.BadParameter("age must be positive")
        profile["age"] = age
    if gender is not None:
        if gender.lower() not in GENDERS:
            raise typer.BadParameter("gender must be male or female")
        profile["gender"] = GENDERS[gender.lower()]

    state.config["profile"] = profile
    path = save_config(state.config, state.config_path)
    state.debug(f"Wrote {path}")
    state.console.print(f"Saved profile to {path}")


@app.command("show")
def show_command(ctx: typer.Context) -> None:
    """Show the configured profile."""
    state = get_state(ctx)
    profile = UserProfile.from_config(state.config)
    if state.json_output:
        print_json_payload(state, asdict(profile))
        return
    gender = "female" if profile.gender == 1 else "male"
    state.console.print(f"Height: {profile.height_cm:g} cm")
    state.console.print(f"Age: {profile.age}")
    state.console.print(f"Gender: {gender}")
