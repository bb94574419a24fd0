"""Built-in sounds shipped with the front-end."""

from sanctum.models.enums import SectionType, SoundSource

SOUNDS_URL_PREFIX = "/sounds"


def _builtin(sound_id: str, name: str, icon: str, file: str) -> dict:
    return {
        "id": sound_id,
        "name": name,
        "icon": icon,
        "file": file,
        "url": f"{SOUNDS_URL_PREFIX}/{file}",
        "source": SoundSource.BUILTIN.value,
    }


DEFAULT_SOUNDS: dict[str, list[dict]] = {
    SectionType.AMBIENT.value: [
        _builtin("city", "City", "🏙️", "city.mp3"),
        _builtin("waves", "Waves", "🌊", "waves.mp3"),
        _builtin("wind", "Wind", "💨", "wind.mp3"),
        _builtin("fire", "Fire", "🔥", "fire.m4a"),
        _builtin("forest", "Forest", "🌲", "forest.mp3"),
        _builtin("rain", "Rain", "🌧️", "rain.m4a"),
        _builtin("war", "War", "⚔️", "war.mp3"),
    ],
    SectionType.EFFECT.value: [
        _builtin("explosion", "Explosion", "💥", "explosion.mp3"),
        _builtin("thunder", "Thunder", "⚡", "thunder.mp3"),
        _builtin("wolf", "Wolf", "🐺", "wolf.mp3"),
        _builtin("roar", "Roar", "🦁", "roar.mp3"),
    ],
}

UPLOADED_ICONS = {
    SectionType.AMBIENT.value: "🎵",
    SectionType.EFFECT.value: "🔊",
}


def get_default_sounds(section: str) -> list[dict]:
    """Copy of the built-in list for a section."""
    return [dict(sound) for sound in DEFAULT_SOUNDS[section]]


def find_builtin_sound(section: str, sound_id: str) -> dict | None:
    """Look up a built-in sound by id within a section."""
    for sound in DEFAULT_SOUNDS[section]:
        if sound["id"] == sound_id:
            return dict(sound)
    return None
