"""
Copyright (c) 2023 Proton AG

This file is part of formwire.

formwire is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

formwire is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with formwire.  If not, see <https://www.gnu.org/licenses/>.
"""
import logging
import os
import warnings
from collections import namedtuple
from importlib import metadata
from typing import Optional

from ..utils import Singleton

logger = logging.getLogger(__name__)

PluggableComponent = namedtuple('PluggableComponent', ['priority', 'class_name', 'cls'])
PluggableComponentName = namedtuple('PluggableComponentName', ['type_name', 'class_name'])


def _entry_points():
    eps = metadata.entry_points()
    if hasattr(eps, "select"):
        return {group: list(eps.select(group=group)) for group in eps.groups}
    # Python < 3.10 returns a plain dict of groups
    return {group: list(entries) for group, entries in eps.items()}


class Loader(metaclass=Singleton):
    """Loader for pluggable components, identified by a type name (``encoder`` for
    the form encoders) and a class name (``multipart``, ``urlencoded``...).

    In normal use, one will only use :meth:`get`, as follows:

    .. code-block::

        from formwire.loader import Loader
        # Loader.get() returns a class, hence the parenthesis.
        encoder = Loader.get('encoder', 'multipart')()

    Candidates are found through the ``formwire_loader_<type_name>`` entry point
    groups. Their classes implement:

    * :meth:`_get_priority`: a numeric value, larger ones have higher priority. ``None`` disables the class.
    * :meth:`_validate` (optional): check that the class can be used. If it returns ``False``, it
      won't be considered for the rest of the process.

    The ``FORMWIRE_LOADER_OVERRIDES`` environment variable is a whitespace separated list of
    ``type_name=class_name`` (to force ``class_name``) and ``type_name=-class_name``
    (to exclude ``class_name``).

    ``python3 -m formwire.loader`` lists what is available.
    """

    __loader_prefix = 'formwire_loader_'

    def __init__(self):
        self.__known_types = {}
        self.__name_resolution_cache = {}

    def get(self, type_name: str, class_name: Optional[str] = None) -> type:
        """Get the implementation for type_name.

        :param type_name: component type
        :type type_name: str
        :param class_name: specific implementation to get, defaults to None (use preferred one)
        :type class_name: Optional[str], optional
        :raises RuntimeError: if no valid implementation can be found, or if FORMWIRE_LOADER_OVERRIDES is invalid.
        :return: the class implementing type_name (a class, not an object)
        :rtype: type
        """
        for entry in self.get_all(type_name):
            if class_name is not None:
                if entry.class_name == class_name:
                    return entry.cls
                continue

            if entry.priority is None:
                continue
            if hasattr(entry.cls, '_validate') and not entry.cls._validate():
                logger.debug("Loader: %s/%s failed validation, discarding it", type_name, entry.class_name)
                self.__known_types[type_name] = {
                    k: v for k, v in self.__known_types[type_name].items() if v != entry.cls
                }
                continue
            return entry.cls

        raise RuntimeError(f"Loader: couldn't find an acceptable implementation for {type_name}.")

    @property
    def type_names(self) -> list:
        """:return: the known type names
        :rtype: list[str]
        """
        return [
            group[len(self.__loader_prefix):] for group in _entry_points()
            if group.startswith(self.__loader_prefix)
        ]

    def get_all(self, type_name: str) -> list:
        """Get all the implementations of ``type_name``, preferred ones first.

        :param type_name: component type
        :type type_name: str
        :raises RuntimeError: if ``FORMWIRE_LOADER_OVERRIDES`` has conflicts
        :return: implementations of type_name, disabled ones (priority ``None``) last
        :rtype: list[PluggableComponent]
        """
        if type_name not in self.__known_types:
            self.__load_entry_points(type_name)
        known = self.__known_types[type_name]

        # Read at every call, so that it can be changed at runtime.
        overrides = os.environ.get('FORMWIRE_LOADER_OVERRIDES', '').split()
        overrides = [x[len(type_name) + 1:] for x in overrides if x.startswith(f'{type_name}=')]

        forced = {x for x in overrides if not x.startswith('-')}
        if len(forced) > 1:
            raise RuntimeError(f"Loader: FORMWIRE_LOADER_OVERRIDES contains multiple force for {type_name}")
        if forced and next(iter(forced)) in known:
            acceptable = set(forced)
        else:
            acceptable = {k for k in known if '-' + k not in overrides}

        with_priority = []
        without_priority = []
        for class_name, cls in known.items():
            priority = cls._get_priority() if class_name in acceptable else None
            component = PluggableComponent(priority, class_name, cls)
            (without_priority if priority is None else with_priority).append(component)

        with_priority.sort(key=lambda c: (c.priority, c.class_name), reverse=True)
        return with_priority + without_priority

    def get_name(self, cls: type) -> Optional[PluggableComponentName]:
        """Inverse lookup of :meth:`get` (useful for logs).

        :return: ``(type_name, class_name)`` of ``cls``, if it was loaded
        :rtype: Optional[PluggableComponentName]
        """
        return self.__name_resolution_cache.get(cls, None)

    def reset(self) -> None:
        """Erase the loader cache (useful for tests)."""
        self.__known_types = {}
        self.__name_resolution_cache = {}

    def set_all(self, type_name: str, implementations: dict):
        """Replace the implementations of ``type_name``, bypassing entry points.

        This is probably useful only for testing.

        :param implementations: implementation name -> implementation class
        :type implementations: dict[str, type]
        """
        self.__known_types[type_name] = dict(implementations)
        for class_name, cls in implementations.items():
            self.__name_resolution_cache[cls] = PluggableComponentName(type_name, class_name)

    def __load_entry_points(self, type_name: str):
        group = self.__loader_prefix + type_name
        self.__known_types[type_name] = {}
        for ep in _entry_points().get(group, ()):
            try:
                cls = ep.load()
            except (AttributeError, ImportError):
                warnings.warn(f"Loader: couldn't load {type_name}/{ep.name}, is it installed properly?",
                              RuntimeWarning, stacklevel=3)
                continue
            self.__known_types[type_name][ep.name] = cls
            self.__name_resolution_cache[cls] = PluggableComponentName(type_name, ep.name)
