from apkhub.registry.codec import MetadataCodec
from apkhub.registry.store import DeleteAppResult, DeleteBuildResult, RegistryStore

__all__ = ["DeleteAppResult", "DeleteBuildResult", "MetadataCodec", "RegistryStore"]
