from tropipay_mcp.resources.tropipay_resources import read_resource, register_resources

__all__ = ['read_resource', 'register_resources']
