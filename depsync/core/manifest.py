# -----------------------------------------------------------------------------
# DEPENDENCY MANIFEST
# -----------------------------------------------------------------------------
# The fixed, ordered list of external repositories. Processing order is the
# list order.
# -----------------------------------------------------------------------------

from depsync.domain.models import RepoEntry, ScriptStep

DEFAULT_REPOSITORIES: list[RepoEntry] = [
    RepoEntry(
        name="cereal",
        url="https://github.com/USCiLab/cereal.git",
    ),
    RepoEntry(
        name="Vulkan-Headers",
        url="https://github.com/KhronosGroup/Vulkan-Headers.git",
        override_key="v_headers_root",
    ),
    RepoEntry(
        name="SPIRV-Cross",
        url="https://github.com/KhronosGroup/SPIRV-Cross.git",
        override_key="spirv_cross_root",
    ),
    RepoEntry(
        name="glslang",
        url="https://github.com/KhronosGroup/glslang.git",
        override_key="glslang_root",
        # Pulls spirv-tools (and its headers) into External/
        post_fetch=[ScriptStep(script="update_glslang_sources.py", interpreter="python")],
        sub_builds=["External/spirv-tools"],
    ),
    RepoEntry(
        name="Vulkan-Tools",
        url="https://github.com/KhronosGroup/Vulkan-Tools.git",
    ),
    RepoEntry(
        name="VulkanSamples",
        url="https://github.com/LunarG/VulkanSamples.git",
        # Dispatch table sources for the Hologram demo
        post_fetch=[
            ScriptStep(
                script="generate-dispatch-table",
                args=["HelpersDispatchTable.h"],
                workdir="Sample-Programs/Hologram",
            ),
            ScriptStep(
                script="generate-dispatch-table",
                args=["HelpersDispatchTable.cpp"],
                workdir="Sample-Programs/Hologram",
            ),
        ],
    ),
]

