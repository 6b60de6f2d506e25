"""Picker programs and their command lines."""

PROGRAMS = {
    "rofi": {
        "name": "Rofi",
        "command": ["rofi", "-dmenu", "-i"],
        "prompt_flag": "-p",
    },
    "dmenu": {
        "name": "dmenu",
        "command": ["dmenu", "-i"],
        "prompt_flag": "-p",
    },
    "wofi": {
        "name": "Wofi",
        "command": ["wofi", "--dmenu", "--insensitive"],
        "prompt_flag": "--prompt",
    },
    "fuzzel": {
        "name": "Fuzzel",
        "command": ["fuzzel", "--dmenu"],
        "prompt_flag": "--prompt",
    },
}
