from tropipay_mcp.prompts.schema_prompts import get_prompt_text, register_prompts

__all__ = ['get_prompt_text', 'register_prompts']
