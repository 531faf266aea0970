r"""Unit tests for ExponentialBackoff."""

from __future__ import annotations

import pytest

from aresdex.backoff import ExponentialBackoff


def test_exponential_backoff_basic() -> None:
    """Test basic exponential backoff calculation."""
    backoff = ExponentialBackoff(factor=2.0, min_delay=1.0, max_delay=60.0)
    assert backoff.calculate(0) == 1.0  # 1.0 * 2^0
    assert backoff.calculate(1) == 2.0  # 1.0 * 2^1
    assert backoff.calculate(2) == 4.0  # 1.0 * 2^2
    assert backoff.calculate(3) == 8.0  # 1.0 * 2^3


def test_exponential_backoff_capped_by_max_delay() -> None:
    """Test basic exponential backoff calculation.
test_exponential_backoff_overflow_returns_max_delay|Test that an overflowing delay is capped at the maximum delay.
test_exponential_backoff_factor_one_is_constant|Test that a factor of one gives a constant delay.
test_exponential_backoff_zero_min_delay|Test that a zero minimum delay always gives a zero delay.
test_exponential_backoff_non_decreasing|Test that delays never decrease with the attempt number.
test_exponential_backoff_repr|Test the string representation of the exponential backoff.
test_exponential_backoff_invalid_factor|Test that an invalid factor raises ValueError.
test_exponential_backoff_invalid_min_delay|Test that an invalid minimum delay raises ValueError.
test_exponential_backoff_invalid_max_delay|Test that an invalid maximum delay raises ValueError.
test_backoff_policy_defaults|Test the default values of a backoff policy.
test_backoff_policy_is_frozen|Test that a backoff policy cannot be mutated.
test_backoff_policy_equality|Test that policies with the same parameters are equal.
test_backoff_policy_allows_retry|Test which policies allow a retry.
test_no_retry_policy|Test that the no-retry policy makes a single attempt.
test_backoff_policy_delay_sequence|Test the delay sequence of a policy without jitter.
test_backoff_policy_delay_bounds|Test that delays stay within the policy bounds.
test_backoff_policy_delay_with_jitter|Test that jitter is added on top of the base delay.
test_backoff_policy_delay_with_jitter_capped|Test that the jittered delay is still capped at the maximum delay.
test_backoff_policy_invalid_max_attempts|Test that an invalid number of attempts raises ValueError.
test_backoff_policy_invalid_jitter_factor|Test that a negative jitter factor raises ValueError.
test_backoff_policy_invalid_factor|Test that an invalid factor raises ValueError.
test_fallback_registry_default_policy|Test that the fallback registry uses the default policy.
test_fallback_registry_returns_same_policy_for_every_name|Test that the fallback registry resolves every name to one policy.
test_fallback_registry_repr|Test the string representation of the fallback registry.
test_no_retry_registry|Test that the no-retry registry never retries.
test_per_operation_registry_dedicated_and_fallback|Test dedicated and fallback resolution of the per-operation registry.
test_per_operation_registry_default_fallback|Test that the per-operation registry falls back to the default policy.
test_per_operation_registry_copies_mapping|Test that the per-operation registry copies its mapping.
test_per_operation_registry_policies_read_only|Test that the registered policies cannot be mutated.
test_default_backoff_registry|Test the registry returned by default_backoff_registry.
test_exponential_backoff_registry|Test the registry returned by exponential_backoff_registry.
test_exponential_backoff_registry_invalid|Test that invalid parameters of exponential_backoff_registry raise ValueError.
test_no_retry_backoff_registry|Test the registry returned by no_retry_backoff_registry.
test_base_registry_is_abstract|Test that the base registry cannot be instantiated.
test_custom_registry|Test that a custom registry subclass resolves policies.
test_api_key_private_client_endpoints|Test the request sent by each API key endpoint.
test_api_key_private_client_signs_every_attempt|Test that every attempt carries fresh signature headers.
test_api_key_private_client_default_signer|Test that the default signer computes the signature headers.
test_api_key_private_client_signing_error_not_retried|Test that a signing failure is not retried.
test_api_key_private_client_cancel_order_sent_once|Test that cancel_order makes a single attempt.
test_api_key_private_client_cancel_all_orders|Test the request sent by cancel_all_orders.
test_private_client_properties|Test the properties of the private client.
test_private_client_endpoints|Test the request sent by each private endpoint.
test_private_client_get_orders_rejects_object|Test that get_orders rejects a payload that is not a list.
test_private_client_create_order_uses_internal_host|Test that create_order is sent to the internal host.
test_private_client_create_order_sent_once|Test that create_order makes a single attempt.
test_private_client_cancel_order|Test the request sent by cancel_order.
test_private_client_uses_private_registry|Test that queries use the private backoff registry.
test_public_client_get_markets|Test the request sent by get_markets with filters.
test_public_client_get_markets_without_filters|Test that get_markets omits unset filters.
test_public_client_endpoints|Test the request sent by each public endpoint.
test_public_client_no_retry_returns_protocol_error|Test that a failing request without retry raises a protocol error.
test_public_client_retries_per_operation|Test that retries follow the policy of each operation.
test_public_client_verify_email_returns_status|Test that verify_email returns the response status.
test_public_client_backoff_policy|Test the backoff policy resolved for an operation.
test_public_client_repr|Test the string representation of the public client.
test_retry_executor_success_first_attempt|Test a successful first attempt.
test_retry_executor_recovers_after_server_errors|Test that the executor recovers after server errors.
test_retry_executor_no_retry_single_attempt|Test that the no-retry policy makes a single attempt.
test_retry_executor_exhausts_attempts|Test that ExchangeRequestError is raised once the attempts are exhausted.
test_retry_executor_reports_last_error|Test that the raised error describes the last failure.
test_retry_executor_retries_decode_errors|Test that decode errors are retried.
test_retry_executor_notifications|Test the error handler notification sent for each failed attempt.
test_retry_executor_default_handler_writes_stderr|Test that the default error handler writes to stderr.
test_retry_executor_handler_error_propagates|Test that an error raised by the handler propagates.
test_retry_executor_cancelled_before_first_attempt|Test cancellation before the first attempt.
test_retry_executor_cancelled_during_backoff|Test cancellation while waiting between attempts.
test_retry_executor_cancel_event_not_set_waits_delay|Test that an unset cancel event waits the full delay.
test_retry_executor_concurrent_sequences_are_independent|Test that concurrent retry sequences do not share state.
test_default_error_handler_writes_stderr|Test that the default error handler writes to stderr.
test_invoke_error_handler_custom|Test that a custom error handler is invoked.
test_invoke_error_handler_default|Test that the default error handler is used when none is given.
test_invoke_error_handler_propagates|Test that an error raised by the handler propagates.
test_compose_sub_clients_without_credentials|Test that only the public sub-client is built without credentials.
test_compose_sub_clients_address|Test the sub-clients built for address credentials.
test_compose_sub_clients_api_key|Test the sub-clients built for API key credentials.
test_compose_sub_clients_share_config|Test that the sub-clients share one configuration.
test_compose_sub_clients_unsupported_credentials|Test that unsupported credentials raise TypeError.
test_exchange_client_defaults|Test the default configuration of the client.
test_exchange_client_without_credentials_has_no_private_surfaces|Test that private surfaces are unavailable without credentials.
test_exchange_client_without_credentials_public_works|Test that public requests work without credentials.
test_exchange_client_with_address_credentials|Test the client built with address credentials.
test_exchange_client_with_api_key_credentials|Test the client built with API key credentials.
test_exchange_client_invalid_options|Test that invalid options raise ValueError.
test_exchange_client_aclose|Test that aclose closes every sub-client.
test_exchange_client_context_manager|Test the client as an async context manager.
test_exchange_client_repr|Test the string representation of the client.
test_exchange_client_private_registry_applies_to_private_only|Test that the private registry only applies to private surfaces.
test_exchange_client_create_order_goes_to_internal_host|Test that create_order is sent to the internal host.
test_exchange_client_backoff_registry_helpers|Test the backoff registry helpers exposed by the client.
test_surface_is_authenticated|Test which surfaces are authenticated.
test_client_options_defaults|Test the default client options.
test_client_config_from_default_options|Test the configuration built from default options.
test_client_config_from_options|Test the configuration built from custom options.
test_client_config_is_frozen|Test that the configuration cannot be mutated.
test_client_config_repr_hides_credentials|Test that the representation hides the credentials.
test_client_config_invalid|Test that invalid options raise ValueError.
test_api_key_credentials_repr_hides_secrets|Test that the representation hides the API key secrets.
test_api_key_credentials_empty_field|Test that an empty API key field raises ValueError.
test_address_credentials_default_subaccount|Test the default subaccount of address credentials.
test_address_credentials_empty_address|Test that an empty address raises ValueError.
test_address_credentials_negative_subaccount|Test that a negative subaccount raises ValueError.
test_json_object_valid|Test that a JSON object with the required keys is accepted.
test_json_object_no_required_keys|Test that any JSON object is accepted without required keys.
test_json_object_missing_keys|Test that missing keys raise KeyError.
test_json_object_not_a_dict|Test that a payload that is not an object raises TypeError.
test_json_list|Test the JSON list decoder.
test_resolve_method|Test the resolution of known HTTP methods.
test_resolve_method_unknown_logs_warning|Test that an unknown method falls back to GET with a warning.
test_build_url_with_prefix|Test URL building with a version prefix.
test_build_url_without_prefix|Test URL building without a version prefix.
test_build_url_strips_slashes|Test that redundant slashes are stripped from the URL.
test_classify_response_success|Test the classification of a successful response.
test_classify_response_applies_decoder|Test that the decoder is applied to a successful payload.
test_classify_response_not_found|Test the classification of a 404 response.
test_classify_response_other_status_is_protocol_error|Test that other error statuses are protocol errors.
test_classify_response_invalid_json|Test that an invalid JSON body is a decode error.
test_classify_response_decoder_rejects_shape|Test that a rejected payload shape is a decode error.
test_classify_response_unreadable_body|Test that an unread error body keeps its status code.
test_request_dispatcher_invalid_timeout|Test that an invalid timeout raises ValueError.
test_request_dispatcher_aclose|Test that aclose closes the connection pool.
test_request_dispatcher_context_manager|Test the dispatcher as an async context manager.
test_request_dispatcher_send_success|Test a successful request.
test_request_dispatcher_send_not_found|Test that a 404 response is classified as not found.
test_request_dispatcher_send_transport_error|Test that a connection failure is a transport error.
test_request_dispatcher_send_timeout|Test that a timeout is a transport error.
test_request_dispatcher_empty_body_is_omitted|Test that an empty body is not sent.
test_request_dispatcher_json_body|Test that the body is sent as JSON.
test_request_dispatcher_unknown_method_sent_as_get|Test that an unknown method is sent as GET.
test_request_dispatcher_query_order|Test that query parameters keep their order.
test_request_dispatcher_authenticator|Test that the authenticator headers are sent.
test_request_dispatcher_send_status|Test that send_status returns the response status.
test_request_dispatcher_send_status_transport_error|Test that send_status reports a transport error.
test_error_kind_values|Test the values of the error kinds.
test_exchange_request_error_attributes|Test the attributes of ExchangeRequestError.
test_exchange_request_error_without_code|Test ExchangeRequestError without a status code.
test_exchange_request_error_from_failure|Test building ExchangeRequestError from a failure.
test_retry_cancelled_error_without_last_error|Test RetryCancelledError without a previous failure.
test_retry_cancelled_error_with_last_error|Test RetryCancelledError with a previous failure.
test_sub_client_not_configured_error|Test the message of SubClientNotConfiguredError.
test_version|Test that the package exposes a version string.
test_all_exports_exist|Test that every name in __all__ is exported.
test_encode_body_none|Test that a missing body is not encoded.
test_encode_body_empty_object_is_omitted|Test that an empty object is not encoded.
test_encode_body_compact_json|Test that the body is encoded as compact JSON.
test_encode_body_list|Test that a list body is encoded.
test_encode_body_not_serializable|Test that a non-serializable body raises TypeError.
test_query_params_skips_none|Test that unset query parameters are skipped.
test_query_params_keeps_order_and_duplicates|Test that query parameters keep their order and duplicates.
test_query_params_booleans|Test the encoding of boolean query parameters.
test_query_params_empty|Test that no parameters give an empty query.
test_request_spec_defaults|Test the default values of a request spec.
test_request_spec_has_body|Test whether a request spec has a body.
test_request_spec_path_with_query|Test the path of a request spec with a query.
test_request_spec_path_without_query|Test the path of a request spec without a query.
test_request_spec_equality_ignores_decoder|Test that request spec equality ignores the decoder.
test_outcomes|Test the success and failure outcomes.
test_api_key_signer_signature|Test the signature computed by the API key signer.
test_api_key_signer_signs_body|Test that the signature covers the body.
test_api_key_signer_unpadded_secret|Test that an unpadded secret is accepted.
test_api_key_signer_invalid_secret|Test that an invalid secret raises SigningError.
test_api_key_authenticator_headers|Test the headers computed by the API key authenticator.
test_api_key_authenticator_custom_signer|Test the authenticator with a custom signer.
test_api_key_authenticator_wraps_signer_errors|Test that signer errors are wrapped in SigningError.
test_api_key_authenticator_fresh_timestamp_per_call|Test that each call uses a fresh timestamp.
test_iso_timestamp_format|Test the format of the ISO timestamp.
test_validate_timeout_valid|Test valid timeouts.
test_validate_timeout_invalid|Test that an invalid timeout raises ValueError.
test_validate_host_valid|Test valid hosts.
test_validate_host_invalid|Test that an invalid host raises ValueError.
test_validate_host_custom_name|Test that the error message uses the given name.
test_validate_network_id|Test the validation of the network id.
test_validate_backoff_params_valid|Test valid backoff parameters.
test_validate_backoff_params_invalid|Test that invalid backoff parameters raise ValueError.
test_validate_max_attempts|Test the validation of the number of attempts.
test_validate_non_empty|Test the validation of non-empty strings.
"""
    backoff = ExponentialBackoff(factor=2.0, min_delay=1.0, max_delay=5.0)
    assert backoff.calculate(3) == 5.0  # Would be 8.0, but capped
    assert backoff.calculate(10) == 5.0  # Would be 1024.0, but capped


def test_exponential_backoff_overflow_returns_max_delay() -> None:
    """Test basic exponential backoff calculation."""
    backoff = ExponentialBackoff(factor=10.0, min_delay=1.0, max_delay=30.0)
    assert backoff.calculate(10_000) == 30.0


def test_exponential_backoff_factor_one_is_constant() -> None:
    """Test that a factor of one gives a constant delay."""
    backoff = ExponentialBackoff(factor=1.0, min_delay=0.5, max_delay=10.0)
    assert [backoff.calculate(n) for n in range(4)] == [0.5, 0.5, 0.5, 0.5]


def test_exponential_backoff_zero_min_delay() -> None:
    """Test that a zero minimum delay always gives a zero delay."""
    backoff = ExponentialBackoff(factor=2.0, min_delay=0.0, max_delay=1.0)
    assert backoff.calculate(0) == 0.0
    assert backoff.calculate(5) == 0.0


def test_exponential_backoff_non_decreasing() -> None:
    """Test that delays never decrease with the attempt number."""
    backoff = ExponentialBackoff(factor=1.5, min_delay=0.1, max_delay=2.0)
    delays = [backoff.calculate(n) for n in range(20)]
    assert delays == sorted(delays)
    assert all(0.1 <= delay <= 2.0 for delay in delays)


def test_exponential_backoff_repr() -> None:
    """Test the string representation of the exponential backoff."""
    assert repr(ExponentialBackoff(factor=2.0, min_delay=1.0, max_delay=60.0)) == (
        "ExponentialBackoff(factor=2.0, min_delay=1.0, max_delay=60.0)"
    )


def test_exponential_backoff_invalid_factor() -> None:
    """Test that an invalid factor raises ValueError."""
    with pytest.raises(ValueError, match=r"factor must be >= 1, got 0.5"):
        ExponentialBackoff(factor=0.5, min_delay=1.0, max_delay=2.0)


def test_exponential_backoff_invalid_min_delay() -> None:
    """Test that an invalid minimum delay raises ValueError."""
    with pytest.raises(ValueError, match=r"min_delay must be >= 0"):
        ExponentialBackoff(factor=2.0, min_delay=-1.0, max_delay=2.0)


def test_exponential_backoff_invalid_max_delay() -> None:
    """Test that an invalid maximum delay raises ValueError."""
    with pytest.raises(ValueError, match=r"max_delay must be >= min_delay"):
        ExponentialBackoff(factor=2.0, min_delay=3.0, max_delay=2.0)


def test_exponential_backoff_zero_min_delay_overflow() -> None:
    """Test that a zero min_delay stays zero past the float range."""
    backoff = ExponentialBackoff(factor=10.0, min_delay=0.0, max_delay=30.0)
    assert backoff.calculate(5) == 0.0
    assert backoff.calculate(10_000) == 0.0
