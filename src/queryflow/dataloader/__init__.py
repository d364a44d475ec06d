from queryflow.dataloader.registry import DataLoaderRegistry

__all__ = ["DataLoaderRegistry"]
