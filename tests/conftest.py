"""
Shared fixtures for smali2java tests.
"""

from pathlib import Path

import pytest

from shared.config import Smali2JavaConfig
from shared.logger import Smali2JavaLogger
from smali2java.parsers.dispatcher import InstructionDispatcher


HELLO_SMALI = """\
.class public Lcom/example/Hello;
.super Landroid/app/Activity;
.source "Hello.java"

# instance fields
.field private static final TAG:Ljava/lang/String; = "Hello"

.field public count:I

# direct methods
.method public constructor <init>()V
    .registers 1

    invoke-direct {p0}, Landroid/app/Activity;-><init>()V

    return-void
.end method

.method public static greet()Ljava/lang/String;
    .registers 1

    const-string v0, "hello world"

    return-object v0
.end method
"""

PLAIN_SMALI = """\
.class public La/b/Plain;
.super Ljava/lang/Object;

.method public static run()V
    invoke-static {}, La/b/Util;->init()V
    return-void
.end method
"""

BROKEN_SMALI = """\
.class public La/b/Broken;
.super Ljava/lang/Object;
.method public broken
"""


@pytest.fixture
def dispatcher():
    """A dispatcher with default options."""
    return InstructionDispatcher()


@pytest.fixture
def quiet_logger():
    """A logger that writes nowhere."""
    return Smali2JavaLogger("test", console_output=False)


@pytest.fixture
def config():
    """Default configuration with a small worker pool."""
    cfg = Smali2JavaConfig()
    cfg.global_settings.max_workers = 2
    return cfg


@pytest.fixture
def smali_tree(tmp_path: Path) -> Path:
    """A small decoded-APK style tree with two good files and one bad one."""
    root = tmp_path / "smali"
    (root / "com" / "example").mkdir(parents=True)
    (root / "a" / "b").mkdir(parents=True)
    (root / "com" / "example" / "Hello.smali").write_text(HELLO_SMALI, encoding="utf-8")
    (root / "a" / "b" / "Plain.smali").write_text(PLAIN_SMALI, encoding="utf-8")
    (root / "a" / "b" / "Broken.smali").write_text(BROKEN_SMALI, encoding="utf-8")
    (root / "a" / "b" / "notes.txt").write_text("not smali\n", encoding="utf-8")
    return root


@pytest.fixture
def plain_source() -> str:
    """Source text of a small well-formed class."""
    return PLAIN_SMALI


@pytest.fixture
def clean_tree(tmp_path: Path) -> Path:
    """A tree with only well-formed files."""
    root = tmp_path / "clean"
    (root / "com" / "example").mkdir(parents=True)
    (root / "com" / "example" / "Hello.smali").write_text(HELLO_SMALI, encoding="utf-8")
    (root / "Plain.smali").write_text(PLAIN_SMALI, encoding="utf-8")
    return root
