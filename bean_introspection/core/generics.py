"""
Recovery of concrete generic arguments from class declarations.

Python keeps the parameterized bases of a class statement in
``__orig_bases__``, so ``class CharacterRepository(Repository[Character])``
records that ``Repository``'s first parameter is bound to ``Character``.
The resolver walks those declarations up the supertype chain.
"""

import logging
import typing
from typing import Any, Callable, Optional, Tuple, Union

from ..exceptions import GenericIndexMismatchError
from .descriptors import TypeDescriptor, TypeRegistry, type_registry

logger = logging.getLogger(__name__)

ArgIndex = Union[int, Callable[[type], int]]


class GenericArgumentResolver:
    """Resolves the class bound to a generic parameter by a subclass."""

    def __init__(self, registry: Optional[TypeRegistry] = None):
        self.registry = registry if registry is not None else type_registry

    def resolve_for_superclass(
        self,
        python_type: Union[type, TypeDescriptor],
        arg_index: int,
        safe: bool = False,
    ) -> Optional[Any]:
        """
        Return the argument at ``arg_index`` of the nearest parameterized supertype.

        Returns None when no class in the chain parameterizes its supertype.

        Raises:
            GenericIndexMismatchError: the parameterized supertype declares
                fewer arguments than requested and ``safe`` is False
        """
        for descriptor in self.registry.describe(python_type).ancestry():
            args = typing.get_args(descriptor.generic_supertype)
            if args:
                return self._extract(descriptor, args, arg_index, safe)
        return None

    def resolve_for_interface(
        self,
        python_type: Union[type, TypeDescriptor],
        interface: Optional[type] = None,
        arg_index: ArgIndex = 0,
        safe: bool = False,
    ) -> Optional[Any]:
        """
        Return a generic argument bound by a directly implemented interface.

        At each level the parameterized interfaces are scanned in declaration
        order; when none yields a result the supertype is searched.
        ``interface`` limits the scan to bases whose raw class is that class.
        ``arg_index`` may be a callable receiving the matched raw class, for
        interface families whose parameters are laid out differently.
        """
        index_for = arg_index if callable(arg_index) else (lambda raw: arg_index)
        for descriptor in self.registry.describe(python_type).ancestry():
            for generic in descriptor.generic_interfaces:
                args = typing.get_args(generic)
                if not args:
                    continue
                raw = typing.get_origin(generic)
                if interface is not None and raw is not interface:
                    continue
                result = self._extract(descriptor, args, index_for(raw), safe)
                if result is not None:
                    return result
        return None

    @staticmethod
    def _extract(
        descriptor: TypeDescriptor, args: Tuple[Any, ...], arg_index: int, safe: bool
    ) -> Optional[Any]:
        if arg_index < 0 or arg_index >= len(args):
            if safe:
                logger.debug(
                    "%s declares %d generic arguments, index %d ignored",
                    descriptor.name,
                    len(args),
                    arg_index,
                )
                return None
            raise GenericIndexMismatchError(len(args), arg_index, descriptor.name)
        argument = args[arg_index]
        origin = typing.get_origin(argument)
        return origin if isinstance(origin, type) else argument


# Global generic argument resolver instance
generic_resolver = GenericArgumentResolver()
