from setuptools import setup, find_packages
import os
import io

here = os.path.abspath(os.path.dirname(__file__))

about = {}
with io.open(os.path.join(here, "src", "glslinclude", "version.py"), encoding="utf-8") as ff:
    exec(ff.read(), about)
__version__ = about["__version__"]

# Get the long description from the README file
with io.open(os.path.join(here, "src", "glslinclude", "README.glslinclude-doc.rst"), encoding="utf-8") as ff:
    long_description = ff.read()

setup(
    name="glslinclude",
    version=__version__,
    description="Flatten GLSL shaders by resolving #include, #pragma once and include guards",
    long_description=long_description,
    long_description_content_type="text/x-rst",
    python_requires=">=3.9",
    license="GPLv3+",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Pre-processors",
        "Topic :: Multimedia :: Graphics :: 3D Rendering",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13"
    ],
    keywords="glsl shader preprocessor include",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={"glslinclude": ["README*", "samples/*/*"]},
    include_package_data=True,
    install_requires=[
        "configargparse>=1.5.3",
        "appdirs>=1.4.4",
        "psutil>=5.9.0",
        "rich>=12.0.0",
        "rich_rst>=1.1.7",
    ],
    extras_require={
        "test": ["pytest"],
    },
    scripts=[ff for ff in os.listdir(here) if ff.startswith("glsl-")],
)
