"""
AI guide command - outputs a guide for AI assistants finishing a migration.
"""

import click


@click.command("ai-guide")
def ai_guide():
    """Output a guide for AI assistants working on the migrated project."""
    guide = """# selenium-to-playwright AI Guide

## Overview
selenium-to-playwright turns a Selenium/QAF Java test suite into a
Playwright + playwright-bdd TypeScript project. Conversion is rule based:
every locator, page method and step sentence is matched against an ordered
list of rules, and the first rule that applies produces the TypeScript.
Anything no rule understood is left behind a greppable marker for you.

## The Two Markers

| Marker | Where | Meaning |
|--------|-------|---------|
| `TODO: Implement` | page methods, step definitions | Stub body; the original Java logic was not converted |
| `TODO: Convert XPath` | page locators | Raw XPath kept as `locator("xpath=...")` so the code still runs |

Also look for `TODO: Review`: the locator was converted, but with a rule
that is known to be approximate (e.g. a `<select>` found by id or name).

```bash
grep -rn "TODO: Implement" src/
grep -rn "TODO: Convert XPath" src/pages/
grep -rn "TODO: Review" src/pages/
```

## Converting XPath
Never leave XPath in place. Prefer, in order:
1. `getByRole('button', { name: 'Save' })` - buttons, links, tabs, checkboxes
2. `getByLabel('Email')` - form inputs with labels
3. `getByPlaceholder('Search')` - inputs with a placeholder
4. `getByText('Welcome')` - unique visible text
5. `getByTestId('submit')` - data-testid attributes
6. `locator('css selector')` - only when none of the above work

Positional XPath (`//div[3]/span[2]`) usually means the element has a
better handle: look at the Java page object's usage and the application's
HTML before reaching for `nth()`.

## Implementing Stubs
The Java source is the reference. Each stub names its origin:

```ts
async submitOrder(quantity: number): Promise<void> {
  // TODO: Implement - submitOrder
  throw new Error('Not implemented');
}
```

Open the Java method of the same name and translate what it does:
- `element.click()` → `await this.element.click()`
- `element.sendKeys(text)` → `await this.element.fill(text)`
- `new Select(el).selectByVisibleText(t)` → `await this.el.selectOption({ label: t })`
- `WebDriverWait ... visibilityOf(el)` → `await this.el.waitFor({ state: 'visible' })`
- `Thread.sleep(...)` → remove it; Playwright auto-waits

Step stubs receive the page fixture named in their parameter list
(`{ loginPage }`); call page methods rather than using `page` directly.
Steps filled in by `implement-steps` switch to the built-in `{ page }`
fixture, because the generated code calls `page.` directly.

## Feature Files
playwright-bdd binds each step by its own keyword. `And`/`But` lines are
already rewritten to the Given/When/Then they continue. An `And` left in a
feature file had no preceding keyword in its scenario; fix it by hand.

## Re-running Stages
- `implement-pages` / `implement-steps` only touch stubs that still carry
  `TODO: Implement`, so they are safe to re-run after editing.
- `setup`, `features`, `pages` and `steps` skip files that already exist
  unless `--force` is given. `--force` overwrites your edits.
- `report` shows what is left; `reports/migration-report.json` has details.

## Tips for AI Assistants

1. **Work file by file** - finish one page class and its steps before moving on
2. **Keep locators on the page class** - steps call page methods, not raw locators
3. **Remove the marker** - a converted stub must not keep `TODO: Implement`
4. **Do not add waits** - Playwright assertions and actions wait on their own
5. **Run `selenium-to-playwright report`** after each batch to track progress
"""
    click.echo(guide)
