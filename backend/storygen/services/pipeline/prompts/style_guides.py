"""
Visual vocabularies used by the enhancement stage.
"""

from typing import Dict

IMAGE_STYLE_GUIDES: Dict[str, Dict[str, str]] = {
    "photorealistic": {
        "name": "Photorealistic",
        "keywords": "photorealistic, ultra detailed, natural lighting, 8k, sharp focus, real photography",
    },
    "cinematic": {
        "name": "Cinematic",
        "keywords": "cinematic film still, dramatic lighting, anamorphic lens, shallow depth of field, color graded",
    },
    "3d-render": {
        "name": "3D Render",
        "keywords": "3D render, octane render, soft global illumination, smooth materials, high detail",
    },
    "digital-art": {
        "name": "Digital Art",
        "keywords": "digital painting, vibrant colors, concept art, detailed brushwork, artstation",
    },
    "anime": {
        "name": "Anime",
        "keywords": "anime style, cel shading, expressive characters, vibrant palette, studio quality",
    },
    "illustration": {
        "name": "Illustration",
        "keywords": "editorial illustration, clean lines, flat shading, storybook composition",
    },
    "watercolor": {
        "name": "Watercolor",
        "keywords": "watercolor painting, soft washes, paper texture, gentle color bleeding",
    },
    "minimalist": {
        "name": "Minimalist",
        "keywords": "minimalist, simple shapes, negative space, limited palette, clean composition",
    },
}

VOICE_MOODS = [
    "neutral", "happy", "sad", "excited", "angry", "whisper",
    "dramatic", "curious", "thoughtful", "surprised", "sarcastic", "nervous",
]

ANIMATION_NAMES = [
    "zoom-in", "zoom-out", "pan-right", "pan-left", "pan-up", "pan-down",
    "ken-burns", "rotate-cw", "rotate-ccw", "slide-left", "slide-right",
]

EFFECT_NAMES = [
    "none", "vignette", "sepia", "black-white", "warm", "cool",
    "grain", "dramatic", "cinematic", "dreamy", "glow",
]

TRANSITIONS = [
    # Motion
    "whip-pan", "zoom-punch", "snap-zoom",
    "motion-blur-left", "motion-blur-right", "motion-blur-up", "motion-blur-down",
    # Light
    "flash-white", "flash-black", "light-leak", "lens-flare", "luma-fade",
    # Digital
    "glitch", "rgb-split", "pixelate", "vhs-noise",
    # Shape reveals
    "circle-open", "circle-close", "diamond-wipe", "star-wipe", "diagonal-tl", "diagonal-br",
    # Smooth
    "smooth-blur", "cross-dissolve", "wave-ripple", "zoom-blur",
    # Classic
    "fade", "wipe-left", "wipe-right", "wipe-up", "wipe-down", "none",
]

# Subset offered between generated video clips
VIDEO_TRANSITIONS = [
    "whip-pan", "zoom-punch", "snap-zoom", "motion-blur-left", "motion-blur-right",
    "flash-white", "flash-black", "light-leak", "lens-flare",
    "glitch", "rgb-split", "pixelate",
    "circle-open", "circle-close", "star-wipe",
    "smooth-blur", "cross-dissolve", "wave-ripple",
    "fade", "none",
]

FINAL_TRANSITION = "none"

ASPECT_RATIO_FRAMING: Dict[str, str] = {
    "9:16": "vertical 9:16 frame, subject centered for mobile viewing",
    "16:9": "widescreen 16:9 frame, balanced horizontal composition",
    "1:1": "square 1:1 frame, centered composition",
    "4:5": "portrait 4:5 frame, subject fills the upper two thirds",
}


def get_style_guide(image_style: str) -> Dict[str, str]:
    return IMAGE_STYLE_GUIDES.get(image_style, IMAGE_STYLE_GUIDES["photorealistic"])
