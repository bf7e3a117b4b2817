"""Configuration for the face-attracted particle flock."""

import math

WINDOW = {
    "width": 1280,
    "height": 720,
    "title": "Face Particles",
    "fps": 60,
    "resizable": True
}

PARTICLES = {
    "count": 600,
    "max_speed": 4.0,
    "max_force": 0.1,
    "initial_speed": (0.5, 2.0),   # Random direction, uniform magnitude
    "size": (3.0, 8.0),
    "color": (150.0, 255.0),       # Per RGB channel
    "alpha": (150.0, 200.0),
    "max_lifespan": 255.0,
    "decay": (0.5, 1.5),
    "regen_factor": 2.0,           # Attracted particles regrow at 2x decay
}

FLOCKING = {
    "separation_distance": 25.0,
    "neighbor_distance": 50.0,     # Alignment + cohesion range
    "cohesion_strength": 0.5,
    "border_buffer": 50.0,
    "separation_weight": 1.5,
    "alignment_weight": 1.0,
    "cohesion_weight": 1.0,
    "border_weight": 1.5,
    "use_spatial_grid": True,
}

ATTRACTION = {
    "radius": 150.0,
    "strength_near": 2.5,          # At distance 0
    "strength_far": 0.5,           # At the edge of the radius
}

# Synthetic face used when no landmark source is available
FALLBACK = {
    "face_scale": 0.3,             # Fraction of min(width, height)
    "eye_offset": (0.2, 0.2),
    "mouth_offset": (0.15, 0.2),
    "outline_radius": 0.5,
    "outline_step": math.pi / 8,
    "jitter": 1.0,                 # Per-axis random walk step per tick
}

# FaceMesh (468 point) indices used as attractors, with sampling stride
KEYPOINTS = {
    "left_eye": ([33, 7, 163, 144, 145, 153, 154, 155, 133, 173, 157, 158, 159, 160, 161, 246], 1),
    "right_eye": ([362, 382, 381, 380, 374, 373, 390, 249, 263, 466, 388, 387, 386, 385, 384, 398], 1),
    "lips": ([61, 146, 91, 181, 84, 17, 314, 405, 321, 375, 291, 409, 270, 269, 267, 0, 37, 39, 40, 185], 1),
    "nose": ([1, 2, 3, 4, 5, 6, 168, 197, 195, 5, 4, 98, 97, 2, 326, 327], 2),
    "left_eyebrow": ([70, 63, 105, 66, 107, 55, 65, 52, 53, 46], 1),
    "right_eyebrow": ([336, 296, 334, 293, 300, 276, 283, 282, 295, 285], 1),
    "face_contour": ([10, 338, 297, 332, 284, 251, 389, 356, 454, 323, 361, 288, 397, 365, 379,
                      378, 400, 377, 152, 148, 176, 149, 150, 136, 172, 58, 132, 93, 234, 127,
                      162, 21, 54, 103, 67, 109, 10], 3),
}

COLORS = {
    "background": (10 / 255, 10 / 255, 10 / 255, 1.0),
    "attractor": (0.0, 1.0, 0.0, 0.9),
    "text": (230, 230, 230),
}

RENDER = {
    "circle_segments": 10,
    "attractor_size": 5.0,
}

HUD = {
    "font": "monospace",
    "font_size": 16,
}
