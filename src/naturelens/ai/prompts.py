"""Fixed instruction templates sent to the model."""

from __future__ import annotations

IDENTIFY_PLANT_PROMPT = """\
You are an expert botanist. Your task is to analyze the provided photo.

First, determine if the image contains a plant. Set the 'isPlant' field accordingly.

If it is a plant, identify it and fill in all the details: common name, scientific name, \
habitat, species, lifespan, and a detailed description. If any detail is unknown, use the \
string "Unknown".

If it is not a plant, set 'isPlant' to false, fill the plant-specific fields with "Unknown", \
and provide a description of what you see in the image.
"""

DESCRIBE_PLANT_PROMPT = """\
You are an expert botanist. Provide a detailed description of the plant named {plant_name}, \
including its scientific name, habitat, species, lifespan, and a general description.

Output the response in JSON format.
"""


def describe_plant_prompt(plant_name: str) -> str:
    return DESCRIBE_PLANT_PROMPT.format(plant_name=plant_name.strip())
