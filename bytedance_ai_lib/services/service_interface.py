import abc
import logging
from typing import Any, Callable, Optional, Type, TypeVar

from bytedance_ai_lib.core.options import ModelOptions
from bytedance_ai_lib.core.options_utils import copy_to_target, merge
from bytedance_ai_lib.core.retry import RetryTemplate, default_retry_template
from bytedance_ai_lib.exceptions import InvalidArgumentError

T = TypeVar("T")


class BaseModelServiceInterface(abc.ABC):
    """
    Abstract base class for the model facades.

    Sub‑classes set ``options_cls`` (the vendor options class the request is
    built from) and ``runtime_options_cls`` (the type a prompt's options must
    have).  The class keeps the API client, the default options and the
    retry template, and offers the option merge and the retried remote call
    every facade needs.
    """

    # Vendor specific options the merged options are converted to
    options_cls: Type[ModelOptions] = ModelOptions

    # Accepted type of per‑call (prompt) options
    runtime_options_cls: Type[ModelOptions] = ModelOptions

    def __init__(
        self,
        api: Any,
        options: Optional[ModelOptions] = None,
        retry_template: Optional[RetryTemplate] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """
        Initialise the facade.

        Parameters
        ----------
        api : Any
            Transport client used for the remote calls.
        options : Optional[ModelOptions]
            Default options; ``None`` uses :meth:`initial_options`.
        retry_template : Optional[RetryTemplate]
            Retry policy; ``None`` uses :func:`default_retry_template`.
        logger : Optional[logging.Logger]
            Logger instance; if omitted, a module‑level logger is created.
        """
        if api is None:
            raise InvalidArgumentError(f"{type(self).__name__} requires an api client")
        self.api = api
        self.logger = logger or logging.getLogger(type(self).__module__)
        self._check_options_type(options)
        self._default_options = (
            copy_to_target(options, self.options_cls)
            if options is not None
            else self.initial_options()
        )
        self.retry_template = retry_template or default_retry_template(self.logger)

    @classmethod
    def initial_options(cls) -> ModelOptions:
        """Defaults used when the caller supplies none."""
        return cls.options_cls()

    @property
    def default_options(self) -> ModelOptions:
        """A copy of the default options of this model."""
        return self._default_options.model_copy(deep=True)

    def refresh_api_key(self, new_api_key: str) -> None:
        """Replace the credential used by the underlying API client."""
        self.api.refresh_api_key(new_api_key)

    def merged_options(self, runtime: Optional[ModelOptions]) -> ModelOptions:
        """
        Lay ``runtime`` options over the defaults.

        Raises
        ------
        InvalidArgumentError
            If ``runtime`` is not an instance of ``runtime_options_cls``.
        """
        self._check_options_type(runtime)
        runtime = copy_to_target(runtime, self.options_cls)
        return merge(runtime, self._default_options, self.options_cls)

    def _check_options_type(self, options: Optional[ModelOptions]) -> None:
        expected = self.runtime_options_cls
        if options is not None and not isinstance(options, expected):
            raise InvalidArgumentError(
                f"Options are not of type {expected.__name__}: "
                f"{type(options).__name__}"
            )

    def execute(self, operation: Callable[[], T]) -> T:
        """Run one remote operation under the retry template."""
        return self.retry_template.execute(lambda ctx: operation())
