import copy
import logging

import pytest

from monorel.config import DEFAULT_CONFIG, parse, validate_config_api
from monorel.config.defaults import EXPERIMENTAL_KEY
from monorel.errors import VALIDATION_BANNER, ValidationError


def _messages(raw, workspace, **kwargs):
    with pytest.raises(ValidationError) as ei:
        parse(raw, workspace, **kwargs)
    return ei.value.messages


def test_validate_happy_defaults(make_workspace):
    # Empty document resolves to the defaults
    cfg = parse({}, make_workspace("pkg-a"))
    assert cfg == DEFAULT_CONFIG
    assert cfg.changelog == ("@changesets/cli/changelog", None)
    assert cfg.access == "restricted"
    assert cfg.commit is False
    assert cfg.linked == ()
    assert cfg.base_branch == "master"
    assert cfg.update_internal_dependencies == "patch"
    assert cfg.ignore == ()
    assert cfg.experimental.only_update_peer_dependents_when_out_of_range is False
    assert cfg.experimental.use_calculated_version_for_snapshots is False


def test_user_values_override_defaults(make_workspace):
    ws = make_workspace("pkg-a", "pkg-b", "pkg-c")
    cfg = parse(
        {
            "changelog": False,
            "access": "public",
            "commit": True,
            "baseBranch": "main",
            "linked": [["pkg-a", "pkg-b"]],
            "updateInternalDependencies": "minor",
            "ignore": ["pkg-c"],
        },
        ws,
    )
    assert cfg.changelog is False
    assert cfg.access == "public"
    assert cfg.commit is True
    assert cfg.base_branch == "main"
    assert cfg.linked == (("pkg-a", "pkg-b"),)
    assert cfg.update_internal_dependencies == "minor"
    assert cfg.ignore == ("pkg-c",)


@pytest.mark.parametrize(
    "bad_cfg,needle",
    [
        ({"changelog": 42}, "`changelog`"),
        ({"changelog": True}, "`changelog`"),
        ({"changelog": None}, "`changelog`"),
        ({"changelog": ["only-one"]}, "`changelog`"),
        ({"changelog": [1, {}]}, "`changelog`"),
        ({"access": "secret"}, "`access`"),
        ({"access": None}, "`access`"),
        ({"commit": "yes"}, "`commit`"),
        ({"commit": 1}, "`commit`"),
        ({"baseBranch": 5}, "`baseBranch`"),
        ({"linked": "pkg-a"}, "`linked`"),
        ({"linked": ["pkg-a"]}, "`linked`"),
        ({"linked": [["pkg-a", 3]]}, "`linked`"),
        ({"updateInternalDependencies": "major"}, "`updateInternalDependencies`"),
        ({"ignore": "pkg-a"}, "`ignore`"),
        ({"ignore": [1]}, "`ignore`"),
        ({"ignore": None}, "`ignore`"),
        ({EXPERIMENTAL_KEY: "on"}, f"`{EXPERIMENTAL_KEY}`"),
        (
            {EXPERIMENTAL_KEY: {"onlyUpdatePeerDependentsWhenOutOfRange": "yes"}},
            "`onlyUpdatePeerDependentsWhenOutOfRange`",
        ),
        (
            {EXPERIMENTAL_KEY: {"useCalculatedVersionForSnapshots": 0}},
            "`useCalculatedVersionForSnapshots`",
        ),
    ],
)
def test_validate_raises_on_bad_values(make_workspace, bad_cfg, needle):
    with pytest.raises(ValidationError) as ei:
        parse(bad_cfg, make_workspace("pkg-a"))
    assert len(ei.value.messages) == 1
    assert needle in ei.value.messages[0]
    assert str(ei.value).startswith(VALIDATION_BANNER + "\n")


def test_message_shows_serialized_value(make_workspace):
    ws = make_workspace("pkg-a")
    (msg,) = _messages({"commit": "yes"}, ws)
    assert 'set as "yes"' in msg
    (msg,) = _messages({"linked": {"a": 1}}, ws)
    assert '{\n  "a": 1\n}' in msg


def test_all_problems_reported_in_field_order(make_workspace):
    ws = make_workspace("pkg-a")
    msgs = _messages(
        {"ignore": ["nope"], "baseBranch": 1, "commit": "yes", "changelog": 42},
        ws,
    )
    assert len(msgs) == 4
    assert msgs[0].startswith("The `changelog` option")
    assert msgs[1].startswith("The `commit` option")
    assert msgs[2].startswith("The `baseBranch` option")
    assert '"nope"' in msgs[3] and "`ignore`" in msgs[3]


# ---- access ---------------------------------------------------------------

def test_access_private_is_rewritten_with_one_warning(make_workspace):
    warnings = []
    cfg = parse({"access": "private"}, make_workspace("pkg-a"), warn=warnings.append)
    assert cfg.access == "restricted"
    assert len(warnings) == 1
    assert '"private"' in warnings[0] and '"restricted"' in warnings[0]


def test_access_private_warns_through_logger_by_default(make_workspace, caplog):
    with caplog.at_level(logging.WARNING, logger="monorel.config.validate"):
        parse({"access": "private"}, make_workspace("pkg-a"))
    records = [r for r in caplog.records if r.name == "monorel.config.validate"]
    assert len(records) == 1
    assert records[0].levelno == logging.WARNING


def test_access_private_warns_even_when_other_errors_exist(make_workspace):
    warnings = []
    msgs = _messages({"access": "private", "commit": "x"}, make_workspace("pkg-a"), warn=warnings.append)
    assert len(warnings) == 1
    assert len(msgs) == 1 and "`commit`" in msgs[0]


def test_other_invalid_access_fails_without_warning(make_workspace):
    warnings = []
    msgs = _messages({"access": "secret"}, make_workspace("pkg-a"), warn=warnings.append)
    assert warnings == []
    assert '"public" or "restricted"' in msgs[0]


# ---- linked ---------------------------------------------------------------

def test_linked_package_in_two_sets_reported_once(make_workspace):
    ws = make_workspace("pkg-a", "pkg-b", "pkg-c")
    msgs = _messages({"linked": [["pkg-a", "pkg-b"], ["pkg-b", "pkg-c"]]}, ws)
    assert len(msgs) == 1
    assert '"pkg-b"' in msgs[0]
    assert "multiple sets of linked packages" in msgs[0]


def test_linked_package_in_three_sets_still_reported_once(make_workspace):
    ws = make_workspace("pkg-a", "pkg-b", "pkg-c", "pkg-d")
    msgs = _messages(
        {"linked": [["pkg-a", "pkg-b"], ["pkg-b", "pkg-c"], ["pkg-d", "pkg-b"]]},
        ws,
    )
    assert msgs == [
        'The package "pkg-b" is in multiple sets of linked packages. '
        "Packages can only be in a single set of linked packages."
    ]


def test_linked_unknown_package_reported(make_workspace):
    msgs = _messages({"linked": [["pkg-a", "ghost"]]}, make_workspace("pkg-a"))
    assert len(msgs) == 1
    assert '"ghost"' in msgs[0]
    assert "not found in the project" in msgs[0]


def test_linked_unknown_names_come_before_duplicates(make_workspace):
    ws = make_workspace("pkg-a", "pkg-b")
    msgs = _messages({"linked": [["pkg-a", "pkg-b"], ["pkg-b", "ghost"]]}, ws)
    assert len(msgs) == 2
    assert '"ghost"' in msgs[0]
    assert '"pkg-b"' in msgs[1] and "multiple sets" in msgs[1]


def test_linked_repeat_inside_one_set_is_not_a_duplicate(make_workspace):
    cfg = parse({"linked": [["pkg-a", "pkg-a"]]}, make_workspace("pkg-a"))
    assert cfg.linked == (("pkg-a", "pkg-a"),)


# ---- ignore ---------------------------------------------------------------

def test_ignore_requires_dependents_to_be_ignored(make_workspace):
    ws = make_workspace("pkg-a", "pkg-b", deps={"pkg-b": ["pkg-a"]})
    msgs = _messages({"ignore": ["pkg-a"]}, ws)
    assert len(msgs) == 1
    assert '"pkg-b" depends on the ignored package "pkg-a"' in msgs[0]


def test_ignoring_the_dependent_too_fixes_it(make_workspace):
    ws = make_workspace("pkg-a", "pkg-b", deps={"pkg-b": ["pkg-a"]})
    cfg = parse({"ignore": ["pkg-a", "pkg-b"]}, ws)
    assert cfg.ignore == ("pkg-a", "pkg-b")


def test_ignore_missing_dependent_reported_per_ignored_package(make_workspace):
    ws = make_workspace("pkg-a", "pkg-b", "pkg-c", deps={"pkg-c": ["pkg-a", "pkg-b"]})
    msgs = _messages({"ignore": ["pkg-a", "pkg-b"]}, ws)
    assert len(msgs) == 2
    assert '"pkg-c"' in msgs[0] and '"pkg-a"' in msgs[0]
    assert '"pkg-c"' in msgs[1] and '"pkg-b"' in msgs[1]


def test_ignore_unknown_package_reported(make_workspace):
    msgs = _messages({"ignore": ["ghost"]}, make_workspace("pkg-a"))
    assert len(msgs) == 1
    assert '"ghost" is specified in the `ignore` option' in msgs[0]


def test_dependents_graph_is_only_built_for_a_usable_ignore_list(make_workspace):
    ws = make_workspace("pkg-a", "pkg-b")
    calls = []

    def graph(workspace):
        calls.append(workspace)
        return {"pkg-a": ["pkg-b"]}

    parse({}, ws, dependents_graph=graph)
    _messages({"ignore": [1]}, ws, dependents_graph=graph)
    assert calls == []

    msgs = _messages({"ignore": ["pkg-a"]}, ws, dependents_graph=graph)
    assert calls == [ws]
    assert '"pkg-b"' in msgs[0]


# ---- changelog / experimental ---------------------------------------------

def test_changelog_bare_string_is_normalized(make_workspace):
    cfg = parse({"changelog": "my-generator"}, make_workspace("pkg-a"))
    assert cfg.changelog == ("my-generator", None)


def test_changelog_pair_passes_through(make_workspace):
    cfg = parse({"changelog": ["my-generator", {"repo": "acme/web"}]}, make_workspace("pkg-a"))
    assert cfg.changelog == ("my-generator", {"repo": "acme/web"})


def test_experimental_flags_default_independently(make_workspace):
    cfg = parse({EXPERIMENTAL_KEY: {"useCalculatedVersionForSnapshots": True}}, make_workspace("pkg-a"))
    assert cfg.experimental.use_calculated_version_for_snapshots is True
    assert cfg.experimental.only_update_peer_dependents_when_out_of_range is False


def test_update_internal_dependencies_lists_only_patch_and_minor(make_workspace):
    (msg,) = _messages({"updateInternalDependencies": "major"}, make_workspace("pkg-a"))
    assert msg.endswith("can only be 'patch' or 'minor'")


# ---- misc -----------------------------------------------------------------

def test_unknown_key_warns_with_suggestion(make_workspace):
    warnings = []
    cfg = parse({"acess": "public"}, make_workspace("pkg-a"), warn=warnings.append)
    assert cfg.access == "restricted"
    assert len(warnings) == 1
    assert "did you mean `access`" in warnings[0]


def test_schema_key_is_accepted_silently(make_workspace):
    warnings = []
    parse({"$schema": "https://example.com/schema.json"}, make_workspace("pkg-a"), warn=warnings.append)
    assert warnings == []


def test_input_is_not_mutated(make_workspace):
    raw = {"access": "private", "linked": [["pkg-a"]], "ignore": ["pkg-a"]}
    before = copy.deepcopy(raw)
    parse(raw, make_workspace("pkg-a"), warn=lambda _: None)
    assert raw == before


def test_non_object_document_is_rejected(make_workspace):
    msgs = _messages(["not", "an", "object"], make_workspace("pkg-a"))
    assert len(msgs) == 1
    assert "only valid value is an object" in msgs[0]


def test_validate_config_api_does_not_raise(make_workspace):
    ws = make_workspace("pkg-a")
    ok, errs, cfg = validate_config_api({"commit": True}, ws)
    assert ok is True and errs == [] and cfg.commit is True

    ok, errs, cfg = validate_config_api({"commit": "x", "baseBranch": 0}, ws)
    assert ok is False and cfg is None
    assert len(errs) == 2
