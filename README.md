# helmoperator

Building blocks for operators that manage Helm releases on behalf of
Kubernetes custom resources. The package covers the parts of such an
operator that work without a live cluster:

- options and their defaults;
- release actions run through a backend that you supply;
- manifest post-rendering;
- annotation-driven action options;
- JSON patch computation;
- small helpers for owner references, finalizers, metrics and build metadata.

The package has no runtime dependencies.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## What is inside

| Module | Purpose |
| --- | --- |
| `helmoperator.version` | Works out the most recent release tag from dependency build information (`Module`, `get_most_recent_tag`, `get_scaffold_version`). |
| `helmoperator.flags` | Command-line options of an operator (`Flags`) and how they merge into `ManagerOptions`. |
| `helmoperator.hook` | Pre- and post-reconcile hooks (`PreHook`, `PostHook`, `PreHookFunc`, `PostHookFunc`). |
| `helmoperator.kube` | Minimal object model: `GroupVersionKind`, `Scope`, `RESTMapping`, `RESTMapper`, `NoKindMatchError`, `KubeObject`. |
| `helmoperator.controllerutil` | Finalizer helpers, `wait_for_deletion`, `WaitTimeoutError` and `supports_owner_reference`. |
| `helmoperator.metrics` | A `Gauge`, a `Registry`, `AlreadyRegisteredError` and `register_build_info`. |
| `helmoperator.testutils` | File-editing helpers for generated projects: `replace_in_file`, `replace_regex_in_file`, `uncomment_code`, `make_image_name`, `make_bundle_image_name`. |
| `helmoperator.actions` | Action settings (`Get`, `Install`, `Upgrade`, `Uninstall`, `Rollback`), results (`Release`, `UninstallResponse`) and `ReleaseNotFoundError`. |
| `helmoperator.annotation` | Annotations on a custom resource that tune install, upgrade and uninstall actions. |
| `helmoperator.postrenderer` | Manifest post-renderers and chaining (`PostRendererFunc`, `ChainedPostRenderer`, `append_post_renderer`). |
| `helmoperator.patch` | JSON patch computation between an existing and an expected object (`diff_operations`, `create_json_merge_patch`). |
| `helmoperator.restclient` | REST client getters bound to a namespace (`RESTClientGetter`, `NamespacedRESTClientGetter`, `NamespaceClientConfig`, `new_rest_client_getter`). |
| `helmoperator.actionclient` | `ActionBackend`, `ActionClient` and `ActionClientGetter`. Together they run release actions with default options, and uninstall or roll back after a failure. |

## Examples

### Flags and manager options

`Flags.add_to` registers the operator's options on an `argparse` parser and
resets the fields to their defaults. `Flags.parse` parses a list of arguments.
`Flags.to_manager_options` returns a completed copy of a `ManagerOptions`.

The merge follows these rules:

- A flag given on the command line always wins.
- Otherwise a value already set in the options is kept.
- An empty value takes the flag's default. The metrics address defaults to
  `:8080` and the health probe address to `:8081`.
- The leader election resource lock defaults to `configmapsleases`.

`--metrics-addr` and `--enable-leader-election` are kept as deprecated
aliases. Using them logs a warning.

```python
import argparse
from helmoperator.flags import Flags, ManagerOptions

flags = Flags()
flags.add_to(argparse.ArgumentParser())
flags.parse(["--metrics-bind-address", ":5678"])
options = flags.to_manager_options(ManagerOptions())
options.metrics_bind_address   # ":5678"
```

### Annotations

Each annotation has a default name under `helm.sdk.operatorframework.io`.
Setting `custom_name` replaces it. The option function an annotation returns
applies the annotation's value to an `Install`, `Upgrade` or `Uninstall`. A
boolean value that cannot be parsed counts as false.

```python
from helmoperator.actions import Install
from helmoperator.annotation import InstallDisableHooks, parse_bool

annotation = InstallDisableHooks()
annotation.name()          # "helm.sdk.operatorframework.io/install-disable-hooks"
install = Install()
annotation.install_option("true")(install)
install.disable_hooks      # True
parse_bool("invalid")      # raises ValueError
```

The standard sets of annotations come from three functions:

- `default_install_annotations()`
- `default_upgrade_annotations()`
- `default_uninstall_annotations()`

### Post-renderers

A post-renderer takes rendered manifest text and returns the changed text.

`append_post_renderer(existing, extra)` returns `extra` when there is no
existing renderer. Otherwise it returns a `ChainedPostRenderer` that runs
`existing` first and then `extra`. If `existing` is already a chain, the new
chain extends it.

A chain runs its renderers in order. A failing step is reported as a
`PostRendererError` carrying the step's index.

Four option functions set the renderer on an action:

- `with_install_post_renderer` and `with_upgrade_post_renderer` replace
  whatever renderer the action already has.
- `append_install_post_renderer` and `append_upgrade_post_renderer` add to
  that renderer.

### Patches

`create_json_merge_patch(existing_json, expected_json)` returns a compact
JSON patch holding the operations that bring the chart-managed fields of the
existing object in line. It drops removals and additions of null values. When
nothing is left to change it returns `None`.

### Action clients

`new_action_client_getter(backend_for, *options)` builds an
`ActionClientGetter`. Its arguments are:

- `backend_for`: a callable that returns an `ActionBackend` for a given
  object.
- `options`: option appenders such as `append_install_options` or
  `append_upgrade_failure_rollback_options`.

The `ActionClient` that the getter hands out applies default options before
the options given with each call.

When an install fails and the exception carries a `release` attribute, the
client uninstalls that release. It uses the install-failure uninstall options
and ignores a `ReleaseNotFoundError`.

When an upgrade fails in the same way, the client rolls the release back. The
rollback is forced and keeps the upgrade's `max_history`.

If that cleanup fails as well, the client raises a `RuntimeError` that names
both errors.

### Owner references

`supports_owner_reference(rest_mapper, owner, dependent)` returns true in
these cases:

- the owner is cluster scoped;
- both objects are namespaced and in the same namespace.

It returns false otherwise. It raises `NoKindMatchError` when either kind has
no REST mapping.

## What the package does not do

The package provides no command to start an operator, no controller manager
and no reconciler.

It does not talk to a Kubernetes API server, and it does not render or store
Helm charts or releases. Release actions are carried out by an
`ActionBackend` that you implement.

Without a discovery factory, `RESTClientGetter.to_discovery_client` only
validates the configured host and returns the server URL.