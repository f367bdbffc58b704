"""Bundled ``matchup`` rulesets.

Capture names are ``<side>.<key>`` or ``<side>.<key>.<n>`` where side is one
of open, mid, close or scope. Each entry is one top-level pattern; a pattern
the installed grammar rejects is skipped on its own.
"""

from __future__ import annotations

RULESETS: dict[str, dict[str, list[str]]] = {
    "matchup": {
        "python": [
            '(if_statement "if" @open.if) @scope.if',
            '(if_statement (elif_clause "elif" @mid.if.1))',
            '(if_statement (else_clause "else" @mid.if.2))',
            '(for_statement "for" @open.loop) @scope.loop',
            '(for_statement (else_clause "else" @mid.loop.1))',
            '(while_statement "while" @open.loop) @scope.loop',
            '(while_statement (else_clause "else" @mid.loop.1))',
            "(break_statement) @mid.loop.2",
            "(continue_statement) @mid.loop.3",
            '(try_statement "try" @open.try) @scope.try',
            '(except_clause "except" @mid.try.1)',
            '(try_statement (else_clause "else" @mid.try.2))',
            '(finally_clause "finally" @mid.try.3)',
            '(function_definition "def" @open.function) @scope.function',
            '(return_statement "return" @mid.function.1)',
        ],
        "lua": [
            '(if_statement "if" @open.if "end" @close.if) @scope.if',
            '(elseif_statement "elseif" @mid.if.1)',
            '(else_statement "else" @mid.if.2)',
            '(function_declaration "function" @open.function "end" @close.function)'
            " @scope.function",
            '(function_definition "function" @open.function "end" @close.function)'
            " @scope.function",
            '(return_statement "return" @mid.function.1)',
            '(for_statement "for" @open.loop "end" @close.loop) @scope.loop',
            '(while_statement "while" @open.loop "end" @close.loop) @scope.loop',
            '(repeat_statement "repeat" @open.loop "until" @close.loop) @scope.loop',
            "(break_statement) @mid.loop.1",
            '(do_statement "do" @open.block "end" @close.block) @scope.block',
        ],
        "bash": [
            '(if_statement "if" @open.if "fi" @close.if) @scope.if',
            '(elif_clause "elif" @mid.if.1)',
            '(else_clause "else" @mid.if.2)',
            '(case_statement "case" @open.case "esac" @close.case) @scope.case',
            '(for_statement "for" @open.loop body: (do_group "done" @close.loop)) @scope.loop',
            '(while_statement "while" @open.loop body: (do_group "done" @close.loop))'
            " @scope.loop",
            '(function_definition "function" @open.function) @scope.function',
        ],
    },
}
