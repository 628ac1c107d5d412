from content_forge.models import GenerationRequest


INSTRUCTION_TEMPLATE = (
    "You are an expert content creator and marketing professional.\n"
    "Your task is to generate a high-quality piece of content based on the "
    "following specifications.\n\n"
    "**Content Type:** {content_type}\n"
    "**Desired Tone:** {tone}\n"
    "**Desired Length:** {length}\n"
    '**Core Topic/Prompt:** "{prompt}"\n\n'
    "Please generate the content now. Provide only the requested content, "
    "without any extra commentary, introduction, or sign-off."
)


def build_instruction(request: GenerationRequest) -> str:
    # str.format does not re-scan substituted values, so braces in the
    # prompt come through untouched.
    return INSTRUCTION_TEMPLATE.format(
        content_type=request.content_type.value,
        tone=request.tone.value,
        length=request.length.value,
        prompt=request.prompt,
    )
