"""Plugin loader - imports a plugin's entry point and obtains its descriptor."""

import importlib.util
import logging
import sys
from typing import Any, Dict, Optional

from superapp.plugins.descriptor import Plugin
from superapp.plugins.errors import PluginLoadError
from superapp.plugins.registry import PluginInstance, PluginState

logger = logging.getLogger(__name__)


class PluginLoader:
    """Turns a discovered PluginInstance into a Plugin descriptor.

    The entry point attribute may be a Plugin, or a factory called with the
    plugin's config dict that returns one.
    """

    def load(self, instance: PluginInstance, config: Optional[Dict[str, Any]] = None) -> Plugin:
        """Import the entry point and return the plugin's descriptor.

        Args:
            instance: Discovered plugin
            config: Plugin settings passed to factory entry points

        Raises:
            PluginLoadError: If the module cannot be imported or does not
                produce a Plugin
        """
        manifest = instance.manifest
        module = self._import_module(instance)

        target = getattr(module, manifest.entry_attribute, None)
        if target is None:
            raise PluginLoadError(
                instance.id, f"module '{manifest.entry_module}' has no attribute '{manifest.entry_attribute}'"
            )

        if not isinstance(target, Plugin):
            if not callable(target):
                raise PluginLoadError(instance.id, f"{manifest.entry_point} is neither a Plugin nor callable")
            target = target(dict(config or {}))
            if not isinstance(target, Plugin):
                raise PluginLoadError(
                    instance.id, f"{manifest.entry_point} returned {type(target).__name__}, expected Plugin"
                )

        if target.name != instance.id:
            logger.warning(
                f"Plugin '{instance.id}' declares descriptor name '{target.name}'; "
                f"conflict messages will use '{target.name}'"
            )
        return target

    def load_into(self, instance: PluginInstance, config: Optional[Dict[str, Any]] = None) -> bool:
        """Load a plugin and record the outcome on the instance.

        Returns:
            True if the descriptor was loaded
        """
        try:
            instance.descriptor = self.load(instance, config)
        except Exception as e:
            instance.state = PluginState.ERROR
            instance.error = str(e)
            logger.error(f"Failed to load plugin {instance.id}: {e}")
            return False

        instance.state = PluginState.LOADED
        instance.error = None
        logger.info(f"Loaded plugin: {instance.id}")
        return True

    def _import_module(self, instance: PluginInstance):
        module_name = instance.manifest.entry_module
        module_file = instance.path / f"{module_name}.py"
        plugin_dir = str(instance.path)

        # Plugin-local imports (sibling modules) resolve from the plugin directory.
        added = plugin_dir not in sys.path
        if added:
            sys.path.insert(0, plugin_dir)
        try:
            spec = importlib.util.spec_from_file_location(
                f"superapp_plugin_{instance.id.replace('-', '_')}_{module_name}", module_file
            )
            if spec is None or spec.loader is None or not module_file.exists():
                raise PluginLoadError(instance.id, f"cannot find module {module_name}.py in {instance.path}")
            module = importlib.util.module_from_spec(spec)
            spec.loader.exec_module(module)
        except PluginLoadError:
            raise
        except Exception as e:
            raise PluginLoadError(instance.id, f"error importing {module_file.name}: {e}") from e
        finally:
            if added and plugin_dir in sys.path:
                sys.path.remove(plugin_dir)
        return module
